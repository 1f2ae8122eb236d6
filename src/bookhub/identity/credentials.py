"""Password hashing and the predefined demo accounts."""

import hashlib
import hmac
import secrets


def new_salt() -> str:
    return secrets.token_hex(16)


def hash_password(password: str, salt: str) -> str:
    return hashlib.sha256(f"{salt}{password}".encode()).hexdigest()


def verify_password(password: str, salt: str, password_hash: str) -> bool:
    return hmac.compare_digest(hash_password(password, salt), password_hash)


# Demo accounts are checked before registered users and are never persisted
# to the registered-users collection.
DEMO_ACCOUNTS = (
    {
        "email": "admin@bookhub.com",
        "password": "admin123",
        "user": {"id": "admin-1", "email": "admin@bookhub.com", "name": "Admin User", "role": "admin"},
    },
    {
        "email": "user@test.com",
        "password": "password123",
        "user": {"id": "user-1", "email": "user@test.com", "name": "Test User", "role": "user"},
    },
)


def match_demo_account(email: str, password: str) -> dict | None:
    """Return a copy of the demo user projection matching the credentials, if any."""
    for account in DEMO_ACCOUNTS:
        if account["email"] == email and hmac.compare_digest(account["password"].encode(), password.encode()):
            return dict(account["user"])
    return None

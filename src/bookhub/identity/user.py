"""User aggregate: a registered account and its password-stripped session projection.

The credential (salted hash) lives only on the registration record. Everything
that leaves the aggregate for the session goes through ``projection()``.
"""

from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Identifier, String

from bookhub.domain import bookhub
from bookhub.identity.credentials import hash_password, new_salt, verify_password
from bookhub.shared.ids import isoformat, next_id, utc_now
from bookhub.shared.records import fields_from_record, record_from_fields


class Role(Enum):
    USER = "user"
    ADMIN = "admin"


_PUBLIC_FIELDS = ("id", "email", "name", "role", "created_at")
_CREDENTIAL_FIELDS = ("password_hash", "password_salt")


@bookhub.aggregate
class User:
    id = Identifier(identifier=True)
    email = String(required=True, max_length=254)
    name = String(required=True, max_length=255)
    role = String(choices=Role, default=Role.USER.value)
    created_at = String(max_length=40)
    password_hash = String(max_length=64)
    password_salt = String(max_length=64)

    @classmethod
    def register(cls, email, name, password, role):
        """Create a new account with a freshly salted password hash."""
        if not password:
            raise ValidationError({"password": ["is required"]})

        salt = new_salt()
        return cls(
            id=next_id(),
            email=email,
            name=name,
            role=Role(role).value,
            created_at=isoformat(utc_now()),
            password_hash=hash_password(password, salt),
            password_salt=salt,
        )

    def check_password(self, password) -> bool:
        if not self.password_hash or not self.password_salt:
            return False
        return verify_password(password, self.password_salt, self.password_hash)

    def assign_role(self, role):
        if role not in {r.value for r in Role}:
            raise ValidationError({"role": [f"Unknown role {role!r}"]})
        self.role = role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    def projection(self) -> dict:
        """The session-visible view of the user: no credential fields."""
        return record_from_fields(self, _PUBLIC_FIELDS)

    def to_record(self) -> dict:
        return record_from_fields(self, _PUBLIC_FIELDS + _CREDENTIAL_FIELDS)

    @classmethod
    def from_record(cls, record):
        return cls(**fields_from_record(record, set(_PUBLIC_FIELDS + _CREDENTIAL_FIELDS)))

"""Identity store: the current session and the registered-users collection."""

import structlog
from protean.exceptions import ValidationError

from bookhub.identity.credentials import match_demo_account
from bookhub.identity.roles import RolePolicy, email_role_policy
from bookhub.identity.user import Role, User
from bookhub.shared.results import ErrorKind, Result
from bookhub.shared.storage import KeyValueStore

logger = structlog.get_logger(__name__)

SESSION_KEY = "session.user"
USERS_KEY = "users"

# Session fields that a profile update may not touch
_PROTECTED_FIELDS = frozenset({"id", "role", "password", "passwordHash", "passwordSalt"})


class IdentityStore:
    """Login, registration, logout and profile updates for the active session.

    The session is rehydrated from storage at construction, so a restarted
    process resumes the last authenticated user.
    """

    def __init__(self, storage: KeyValueStore, role_policy: RolePolicy = email_role_policy) -> None:
        self._storage = storage
        self._role_policy = role_policy
        self._users = [User.from_record(record) for record in storage.get(USERS_KEY) or []]
        self._current_user: dict | None = storage.get(SESSION_KEY)

    # -------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------
    @property
    def current_user(self) -> dict | None:
        return dict(self._current_user) if self._current_user is not None else None

    @property
    def is_authenticated(self) -> bool:
        return self._current_user is not None

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated and self._current_user.get("role") == Role.ADMIN.value

    @property
    def registered_users(self) -> list[dict]:
        """Password-stripped projections of every registered user."""
        return [user.projection() for user in self._users]

    def find_user(self, email: str) -> User | None:
        return next((user for user in self._users if user.email == email), None)

    # -------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------
    def login(self, email: str, password: str) -> Result:
        projection = match_demo_account(email, password)

        if projection is None:
            user = self.find_user(email)
            if user is not None and user.check_password(password):
                projection = user.projection()

        if projection is None:
            logger.info("Login rejected", email=email)
            return Result.fail(ErrorKind.INVALID_CREDENTIALS, "Invalid credentials. Please try again.")

        self._start_session(projection)
        logger.info("User logged in", user_id=projection["id"], role=projection["role"])
        return Result.ok(projection["role"])

    def register(self, user_data: dict) -> Result:
        email = user_data.get("email")
        if not email:
            return Result.fail(ErrorKind.VALIDATION_ERROR, "Email is required", {"email": ["is required"]})

        if self.find_user(email) is not None:
            logger.info("Registration rejected, email taken", email=email)
            return Result.fail(ErrorKind.EMAIL_ALREADY_EXISTS, "Email already exists")

        try:
            user = User.register(
                email=email,
                name=user_data.get("name"),
                password=user_data.get("password"),
                role=self._role_policy(email),
            )
        except ValidationError as exc:
            return Result.fail(ErrorKind.VALIDATION_ERROR, "Invalid registration details", exc.messages)

        self._persist_users([*self._users, user])
        self._start_session(user.projection())

        logger.info("User registered", user_id=user.id, role=user.role)
        return Result.ok()

    def logout(self) -> None:
        user_id = self._current_user.get("id") if self._current_user else None
        self._current_user = None
        self._storage.delete(SESSION_KEY)
        logger.info("User logged out", user_id=user_id)

    def update_user(self, patch: dict) -> Result:
        """Merge ``patch`` into the session user.

        Fails with ``NoActiveSession`` when nobody is logged in. The change is
        confined to the session projection; registration records keep the
        details they were created with.
        """
        if self._current_user is None:
            return Result.fail(ErrorKind.NO_ACTIVE_SESSION, "No user is logged in")

        protected = sorted(_PROTECTED_FIELDS.intersection(patch))
        if protected:
            return Result.fail(
                ErrorKind.VALIDATION_ERROR,
                "Profile updates cannot change identity, role or credentials",
                {field: ["cannot be updated"] for field in protected},
            )

        updated = {**self._current_user, **patch}
        self._start_session(updated)
        logger.info("Session user updated", user_id=updated["id"], fields=sorted(patch))
        return Result.ok(dict(updated))

    def set_role(self, user_id: str, role: str) -> Result:
        """Grant or revoke a role on a registered user. Requires an admin session."""
        if not self.is_admin:
            return Result.fail(ErrorKind.NOT_AUTHORIZED, "Only administrators can assign roles")

        users = [User.from_record(user.to_record()) for user in self._users]
        user = next((u for u in users if u.id == user_id), None)
        if user is None:
            return Result.fail(ErrorKind.NOT_FOUND, f"User {user_id} not found")

        try:
            user.assign_role(role)
        except ValidationError as exc:
            return Result.fail(ErrorKind.VALIDATION_ERROR, f"Unknown role {role!r}", exc.messages)

        self._persist_users(users)

        if self._current_user and self._current_user.get("id") == user_id:
            self._start_session({**self._current_user, "role": role})

        logger.info("User role assigned", user_id=user_id, role=role)
        return Result.ok()

    # -------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------
    def _start_session(self, projection: dict) -> None:
        self._storage.set(SESSION_KEY, projection)
        self._current_user = dict(projection)

    def _persist_users(self, users: list[User]) -> None:
        self._storage.set(USERS_KEY, [user.to_record() for user in users])
        self._users = users

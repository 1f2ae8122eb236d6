"""Explicit success/failure values returned by store operations."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(Enum):
    INVALID_CREDENTIALS = "InvalidCredentials"
    EMAIL_ALREADY_EXISTS = "EmailAlreadyExists"
    NOT_FOUND = "NotFound"
    CANNOT_CANCEL = "CannotCancel"
    INVALID_TRANSITION = "InvalidTransition"
    VALIDATION_ERROR = "ValidationError"
    NO_ACTIVE_SESSION = "NoActiveSession"
    NOT_AUTHORIZED = "NotAuthorized"
    EMPTY_CART = "EmptyCart"
    PAYMENT_FAILED = "PaymentFailed"
    ALREADY_SETTLED = "AlreadySettled"


@dataclass(frozen=True)
class Result:
    """Outcome of a store operation.

    ``value`` carries the payload of a successful call (a role, an order, a
    pending checkout). ``error`` and ``message`` describe a failure; ``details``
    holds field-level messages for validation failures.
    """

    success: bool
    value: Any = None
    error: ErrorKind | None = None
    message: str | None = None
    details: dict | None = None

    @classmethod
    def ok(cls, value: Any = None) -> "Result":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: ErrorKind, message: str, details: dict | None = None) -> "Result":
        return cls(success=False, error=error, message=message, details=details)

    def __bool__(self) -> bool:
        return self.success

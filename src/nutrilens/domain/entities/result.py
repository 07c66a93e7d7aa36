"""Explicit result types returned by auth operations.

Every Auth Service operation returns either ``Ok(value)`` or
``Err(AuthError)``. The HTTP layer is responsible for turning an
``ErrorCode`` into a status code and a response envelope.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


class ErrorCode(str, Enum):
    """Stable error codes exposed to API clients."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    EMAIL_EXISTS = "EMAIL_EXISTS"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_TOKEN = "INVALID_TOKEN"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    RATE_LIMITED = "RATE_LIMITED"
    SERVER_ERROR = "SERVER_ERROR"


@dataclass(frozen=True)
class AuthError:
    """A domain failure.

    Attributes:
        code: Machine-readable error code.
        message: Human-readable message, safe to show to clients.
        details: Optional structured details (missing fields, rule failures).
    """

    code: ErrorCode
    message: str
    details: dict[str, Any] | None = None


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying an AuthError."""

    error: AuthError

    @property
    def is_ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]


def validation_error(message: str, details: dict[str, Any] | None = None) -> Err:
    """Shortcut for the most common failure."""
    return Err(AuthError(ErrorCode.VALIDATION_ERROR, message, details))

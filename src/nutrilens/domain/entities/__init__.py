"""Domain entities for NutriLens auth.

Plain dataclasses with no dependencies on infrastructure or frameworks.
"""

from nutrilens.domain.entities.auth import (
    AccessGrant,
    AuthSession,
    LoginCommand,
    LogoutCommand,
    SignupCommand,
)
from nutrilens.domain.entities.auth_config import AuthConfig
from nutrilens.domain.entities.result import (
    AuthError,
    Err,
    ErrorCode,
    Ok,
    Result,
    validation_error,
)

__all__ = [
    "AccessGrant",
    "AuthConfig",
    "AuthError",
    "AuthSession",
    "Err",
    "ErrorCode",
    "LoginCommand",
    "LogoutCommand",
    "Ok",
    "Result",
    "SignupCommand",
    "validation_error",
]

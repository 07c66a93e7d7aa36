"""Domain services for NutriLens.

Services contain business logic that doesn't naturally fit within a single entity.
They have no dependencies on infrastructure or external frameworks.
"""

from nutrilens.domain.services.password_validator import (
    COMMON_PASSWORDS,
    PasswordValidationError,
    PasswordValidator,
)
from nutrilens.domain.services.signup_validator import (
    LOGIN_REQUIRED_FIELDS,
    SIGNUP_REQUIRED_FIELDS,
    FieldValidator,
)

__all__ = [
    "COMMON_PASSWORDS",
    "FieldValidator",
    "LOGIN_REQUIRED_FIELDS",
    "PasswordValidationError",
    "PasswordValidator",
    "SIGNUP_REQUIRED_FIELDS",
]

"""Password validation service.

Validates password strength according to configurable rules:
- Minimum length
- Optional uppercase letter requirement
- Optional digit requirement
- Optional special character requirement
- Rejection of common passwords
"""

import re
from dataclasses import dataclass

from nutrilens.domain.entities.auth_config import AuthConfig

# Substring deny-list, compared case-insensitively.
COMMON_PASSWORDS: tuple[str, ...] = (
    "password123",
    "password",
    "password1",
    "123456",
    "123456789",
    "12345678",
    "qwerty",
    "qwerty123",
    "abc123",
    "admin",
    "welcome",
    "login",
    "letmein",
    "dragon",
    "master",
    "monkey",
)


@dataclass(frozen=True)
class PasswordValidationError:
    """Represents a password validation error.

    Attributes:
        field: The field name (always 'password').
        message: Human-readable error message.
        code: Machine-readable error code.
    """

    field: str
    message: str
    code: str


class PasswordValidator:
    """Validates password strength.

    Default policy:
    - Minimum 8 characters
    - No character-class requirements
    """

    SPECIAL_CHARS = "!@#$%^&*"

    def __init__(
        self,
        min_length: int = 8,
        require_uppercase: bool = False,
        require_digit: bool = False,
        require_special: bool = False,
        common_passwords: tuple[str, ...] = COMMON_PASSWORDS,
    ) -> None:
        """Initialize the password validator.

        Args:
            min_length: Minimum password length (default 8).
            require_uppercase: Require at least one uppercase letter.
            require_digit: Require at least one digit.
            require_special: Require at least one of ``!@#$%^&*``.
            common_passwords: Deny-list matched as case-insensitive substrings.
        """
        self.min_length = min_length
        self.require_uppercase = require_uppercase
        self.require_digit = require_digit
        self.require_special = require_special
        self._common = tuple(p.lower() for p in common_passwords)

    @classmethod
    def from_config(cls, config: AuthConfig) -> "PasswordValidator":
        return cls(
            min_length=config.min_password_length,
            require_uppercase=config.require_uppercase,
            require_digit=config.require_digit,
            require_special=config.require_special_char,
        )

    def validate(self, password: str) -> list[PasswordValidationError]:
        """Validate a password against the strength policy.

        The common-password check is separate, see ``is_common``.

        Args:
            password: The password to validate.

        Returns:
            List of validation errors. Empty list if password is valid.
        """
        errors: list[PasswordValidationError] = []

        if len(password) < self.min_length:
            errors.append(
                PasswordValidationError(
                    field="password",
                    message=f"Password must be at least {self.min_length} characters long",
                    code="password_too_short",
                )
            )

        if self.require_uppercase and not re.search(r"[A-Z]", password):
            errors.append(
                PasswordValidationError(
                    field="password",
                    message="Password must contain at least one uppercase letter",
                    code="password_no_uppercase",
                )
            )

        if self.require_digit and not re.search(r"\d", password):
            errors.append(
                PasswordValidationError(
                    field="password",
                    message="Password must contain at least one number",
                    code="password_no_digit",
                )
            )

        if self.require_special and not re.search(
            f"[{re.escape(self.SPECIAL_CHARS)}]", password
        ):
            errors.append(
                PasswordValidationError(
                    field="password",
                    message=(
                        "Password must contain at least one special character "
                        f"({self.SPECIAL_CHARS})"
                    ),
                    code="password_no_special",
                )
            )

        return errors

    def is_common(self, password: str) -> bool:
        """Check whether the password contains a deny-listed password."""
        lowered = password.lower()
        return any(common in lowered for common in self._common)

    def is_valid(self, password: str) -> bool:
        """Check if a password passes both strength and deny-list checks."""
        return not self.validate(password) and not self.is_common(password)

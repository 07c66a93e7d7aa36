"""Field validation for signup and login input.

Each check returns an error message (or a list of missing fields) instead
of raising, so the Auth Service can apply them in a fixed priority order
and report only the first failure.
"""

import re

from email_validator import EmailNotValidError, validate_email

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
NAME_PATTERN = re.compile(r"^[a-zA-Z\s\-']+$")

# Wire field name -> SignupCommand attribute
SIGNUP_REQUIRED_FIELDS: dict[str, str] = {
    "name": "name",
    "email": "email",
    "password": "password",
    "confirmPassword": "confirm_password",
}
LOGIN_REQUIRED_FIELDS: dict[str, str] = {
    "email": "email",
    "password": "password",
}


class FieldValidator:
    """Stateless validators shared by signup and login."""

    @staticmethod
    def missing_fields(command: object, required: dict[str, str]) -> list[str]:
        """Return wire names of required fields that are absent or empty.

        Args:
            command: A command dataclass.
            required: Mapping of wire field name to command attribute.

        Returns:
            Missing field names, in declaration order.
        """
        return [
            wire_name
            for wire_name, attr in required.items()
            if not getattr(command, attr, None)
        ]

    @staticmethod
    def is_valid_email(email: str) -> bool:
        """Check that an email address is syntactically valid.

        Deliverability (DNS) is not checked.
        """
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError:
            return False
        return True

    @staticmethod
    def normalize_email(email: str) -> str:
        return email.strip().lower()

    @staticmethod
    def sanitize(value: str) -> str:
        return value.strip()

    @staticmethod
    def validate_name(name: str) -> str | None:
        """Validate a display name.

        Args:
            name: Already sanitized name.

        Returns:
            An error message, or None if the name is valid.
        """
        if not name:
            return "Name is required"
        if len(name) < NAME_MIN_LENGTH:
            return f"Name must be at least {NAME_MIN_LENGTH} characters"
        if len(name) > NAME_MAX_LENGTH:
            return f"Name must not exceed {NAME_MAX_LENGTH} characters"
        if not NAME_PATTERN.match(name):
            return "Name can only contain letters, spaces, hyphens, and apostrophes"
        return None

"""Unit tests for signup/login field validation."""

import pytest

from nutrilens.domain.entities import LoginCommand, SignupCommand
from nutrilens.domain.services import (
    LOGIN_REQUIRED_FIELDS,
    SIGNUP_REQUIRED_FIELDS,
    FieldValidator,
)


class TestMissingFields:

    def test_reports_wire_names_in_order(self):
        command = SignupCommand(name="Ana", email="", password=None, confirm_password=None)

        missing = FieldValidator.missing_fields(command, SIGNUP_REQUIRED_FIELDS)

        assert missing == ["email", "password", "confirmPassword"]

    def test_nothing_missing(self):
        command = LoginCommand(email="ana@example.com", password="x")

        assert FieldValidator.missing_fields(command, LOGIN_REQUIRED_FIELDS) == []


class TestEmail:

    @pytest.mark.parametrize(
        "email",
        ["ana@example.com", "ana.pop+tag@example.co.uk", "ANA@EXAMPLE.COM"],
    )
    def test_valid_emails(self, email):
        assert FieldValidator.is_valid_email(email) is True

    @pytest.mark.parametrize(
        "email",
        ["not-an-email", "ana@", "@example.com", "ana@@example.com", "ana pop@example.com"],
    )
    def test_invalid_emails(self, email):
        assert FieldValidator.is_valid_email(email) is False

    def test_normalize_email(self):
        assert FieldValidator.normalize_email("  Ana@Example.COM ") == "ana@example.com"


class TestName:

    @pytest.mark.parametrize("name", ["Ana Pop", "Jean-Luc", "O'Brien", "Al"])
    def test_valid_names(self, name):
        assert FieldValidator.validate_name(name) is None

    def test_too_short(self):
        assert FieldValidator.validate_name("A") == "Name must be at least 2 characters"

    def test_too_long(self):
        assert FieldValidator.validate_name("A" * 51) == "Name must not exceed 50 characters"

    @pytest.mark.parametrize("name", ["Ana123", "Ana_Pop", "Ana<script>", "Zoë"])
    def test_invalid_characters(self, name):
        assert (
            FieldValidator.validate_name(name)
            == "Name can only contain letters, spaces, hyphens, and apostrophes"
        )

    def test_sanitize_trims(self):
        assert FieldValidator.sanitize("  Ana Pop  ") == "Ana Pop"

"""Input and output value types for the auth operations.

Request bodies are parsed by the API layer and converted into these
commands before they reach the Auth Service; the service answers with
the session/grant types below.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SignupCommand:
    """Everything needed to create an account.

    Required text fields may arrive empty; the service reports them as
    missing rather than rejecting the command at construction.
    """

    name: str | None
    email: str | None
    password: str | None
    confirm_password: str | None
    accept_terms: bool = False
    accept_privacy: bool = False
    accept_gdpr: bool = False
    consent_marketing: bool = False
    consent_analytics: bool = False
    platform: str | None = None
    ip_address: str | None = None


@dataclass(frozen=True)
class LoginCommand:
    email: str | None
    password: str | None
    device_id: str | None = None
    platform: str | None = None
    ip_address: str | None = None


@dataclass(frozen=True)
class LogoutCommand:
    user_id: str
    refresh_token: str | None = None
    ip_address: str | None = None


@dataclass(frozen=True)
class AuthSession:
    """Token pair issued by signup and login.

    Attributes:
        user_id: ID of the authenticated user.
        email: Normalized (lower-case) email.
        name: Display name.
        access_token: Signed short-lived access token.
        refresh_token: Signed refresh token; only its digest is stored.
        expires_in: Access token lifetime in seconds.
        last_login: Login timestamp (None for signup).
    """

    user_id: str
    email: str
    name: str
    access_token: str
    refresh_token: str
    expires_in: int
    last_login: datetime | None = None


@dataclass(frozen=True)
class AccessGrant:
    """A fresh access token produced by refresh."""

    access_token: str
    expires_in: int

"""Pydantic schemas for authentication endpoints.

Field names are snake_case in Python and camelCase on the wire. Request
fields are all optional at the schema level: missing required fields are
reported by the Auth Service as a single VALIDATION_ERROR listing them.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from nutrilens.domain.entities import AccessGrant, AuthSession


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SignupRequest(CamelModel):
    """Request body for account signup."""

    name: str | None = Field(None, description="Display name")
    email: str | None = Field(None, description="User's email address")
    password: str | None = Field(None, description="User's password")
    confirm_password: str | None = Field(None, description="Password confirmation")
    accept_terms: bool = Field(False, description="Accepted the terms of service")
    accept_privacy: bool = Field(False, description="Accepted the privacy policy")
    accept_gdpr: bool = Field(False, alias="acceptGDPR", description="Accepted GDPR processing")
    consent_marketing: bool = Field(False, description="Opted in to marketing")
    consent_analytics: bool = Field(False, description="Opted in to analytics")
    platform: str | None = Field(None, max_length=20, description="Client platform")


class LoginRequest(CamelModel):
    """Request body for login."""

    email: str | None = Field(None, description="User's email address")
    password: str | None = Field(None, description="User's password")
    device_id: str | None = Field(None, max_length=100, description="Client device identifier")
    platform: str | None = Field(None, max_length=20, description="Client platform")


class RefreshRequest(CamelModel):
    """Request body for token refresh."""

    refresh_token: str | None = Field(None, description="Refresh token from signup or login")


class LogoutRequest(CamelModel):
    """Request body for logout. The refresh token is optional."""

    refresh_token: str | None = Field(None, description="Refresh token to revoke")


class AuthSessionData(CamelModel):
    """Token pair returned by signup and login."""

    user_id: str
    email: str
    name: str
    token: str = Field(..., description="Access token")
    refresh_token: str
    expires_in: int = Field(..., description="Access token lifetime in seconds")
    last_login: datetime | None = None

    @classmethod
    def from_session(cls, session: AuthSession) -> "AuthSessionData":
        return cls(
            user_id=session.user_id,
            email=session.email,
            name=session.name,
            token=session.access_token,
            refresh_token=session.refresh_token,
            expires_in=session.expires_in,
            last_login=session.last_login,
        )


class AccessTokenData(CamelModel):
    """Fresh access token returned by refresh."""

    token: str
    expires_in: int

    @classmethod
    def from_grant(cls, grant: AccessGrant) -> "AccessTokenData":
        return cls(token=grant.access_token, expires_in=grant.expires_in)

"""Pydantic schemas for API request/response models."""

from nutrilens.infrastructure.api.schemas.auth_schemas import (
    AccessTokenData,
    AuthSessionData,
    LoginRequest,
    LogoutRequest,
    RefreshRequest,
    SignupRequest,
)

__all__ = [
    "AccessTokenData",
    "AuthSessionData",
    "LoginRequest",
    "LogoutRequest",
    "RefreshRequest",
    "SignupRequest",
]

"""FastAPI dependencies for configuration, services and authentication.

Provides the injected AuthConfig, the Auth Service wired to a request's
database session, and extraction of the current user from a Bearer token.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from nutrilens.application.services import AuthService
from nutrilens.core.config import get_settings
from nutrilens.core.logging import get_logger
from nutrilens.domain.entities import AuthConfig, ErrorCode
from nutrilens.infrastructure.api.errors import APIError
from nutrilens.infrastructure.auth import (
    CredentialHasher,
    InvalidTokenError,
    TokenCodec,
    TokenExpiredError,
)
from nutrilens.infrastructure.persistence.database import get_db_session

logger = get_logger(__name__)


@dataclass
class CurrentUser:
    """Represents the current authenticated user context.

    Extracted from a valid access token.
    """

    user_id: str
    email: str


@lru_cache
def get_auth_config() -> AuthConfig:
    """Build the auth configuration once from application settings."""
    return AuthConfig.from_settings(get_settings())


def get_token_codec(
    config: Annotated[AuthConfig, Depends(get_auth_config)],
) -> TokenCodec:
    return TokenCodec(config)


def get_credential_hasher(
    config: Annotated[AuthConfig, Depends(get_auth_config)],
) -> CredentialHasher:
    return CredentialHasher(config.hash_cost)


def get_auth_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    config: Annotated[AuthConfig, Depends(get_auth_config)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
    hasher: Annotated[CredentialHasher, Depends(get_credential_hasher)],
) -> AuthService:
    return AuthService(session, config, codec=codec, hasher=hasher)


def get_client_ip(request: Request) -> str | None:
    """Return the caller's IP address.

    X-Forwarded-For is never read here. Behind a proxy, uvicorn rewrites
    the client address from it, but only for peers listed in
    ``forwarded_allow_ips``.
    """
    return request.client.host if request.client else None


async def get_current_user(
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
    authorization: Annotated[str | None, Header()] = None,
) -> CurrentUser:
    """Extract and validate the current user from the Authorization header.

    Args:
        codec: Token codec used to verify the access token.
        authorization: The Authorization header value (e.g., "Bearer <token>").

    Returns:
        CurrentUser: The authenticated user's context.

    Raises:
        APIError: UNAUTHORIZED if the token is missing, invalid, or expired.
    """
    headers = {"WWW-Authenticate": "Bearer"}

    if authorization is None:
        logger.info("Authentication failed: missing Authorization header")
        raise APIError(ErrorCode.UNAUTHORIZED, "Authentication required", headers=headers)

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.info("Authentication failed: invalid Authorization header format")
        raise APIError(ErrorCode.UNAUTHORIZED, "Invalid authorization header", headers=headers)

    try:
        payload = codec.verify_access(parts[1])
    except TokenExpiredError:
        logger.info("Authentication failed: token expired")
        raise APIError(ErrorCode.UNAUTHORIZED, "Token has expired", headers=headers)
    except InvalidTokenError as e:
        logger.info("Authentication failed: invalid token", error=str(e))
        raise APIError(ErrorCode.UNAUTHORIZED, "Invalid token", headers=headers)

    return CurrentUser(user_id=payload["sub"], email=payload["email"])


# Type aliases for dependency injection
AuthenticatedUser = Annotated[CurrentUser, Depends(get_current_user)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]

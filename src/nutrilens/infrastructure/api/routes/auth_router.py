"""Authentication API routes.

Provides endpoints for signup, login, token refresh and logout. Handlers
convert request bodies into commands, call the Auth Service and render
its result; an ``Err`` is raised as an APIError and rendered by the
registered exception handler.
"""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from nutrilens.core.logging import get_logger
from nutrilens.domain.entities import Err, LoginCommand, LogoutCommand, SignupCommand
from nutrilens.infrastructure.api.dependencies import (
    AuthenticatedUser,
    AuthServiceDep,
    get_client_ip,
)
from nutrilens.infrastructure.api.errors import APIError, success_response
from nutrilens.infrastructure.api.schemas import (
    AccessTokenData,
    AuthSessionData,
    LoginRequest,
    LogoutRequest,
    RefreshRequest,
    SignupRequest,
)

logger = get_logger(__name__)

router = APIRouter()


def _dump(model: AuthSessionData | AccessTokenData) -> dict:
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Validation error"},
        409: {"description": "Email already registered"},
        429: {"description": "Too many attempts"},
    },
)
async def signup(
    body: SignupRequest,
    request: Request,
    auth_service: AuthServiceDep,
) -> JSONResponse:
    """Create an account and return an access/refresh token pair."""
    result = await auth_service.signup(
        SignupCommand(
            name=body.name,
            email=body.email,
            password=body.password,
            confirm_password=body.confirm_password,
            accept_terms=body.accept_terms,
            accept_privacy=body.accept_privacy,
            accept_gdpr=body.accept_gdpr,
            consent_marketing=body.consent_marketing,
            consent_analytics=body.consent_analytics,
            platform=body.platform,
            ip_address=get_client_ip(request),
        )
    )
    if isinstance(result, Err):
        raise APIError.from_auth_error(result.error)

    return success_response(
        request,
        "Account created successfully",
        _dump(AuthSessionData.from_session(result.value)),
        status_code=status.HTTP_201_CREATED,
    )


@router.post(
    "/login",
    responses={
        400: {"description": "Validation error"},
        401: {"description": "Invalid credentials"},
        429: {"description": "Too many attempts"},
    },
)
async def login(
    body: LoginRequest,
    request: Request,
    auth_service: AuthServiceDep,
) -> JSONResponse:
    """Authenticate with email and password.

    Unknown emails and wrong passwords return the same 401 response.
    """
    result = await auth_service.login(
        LoginCommand(
            email=body.email,
            password=body.password,
            device_id=body.device_id,
            platform=body.platform,
            ip_address=get_client_ip(request),
        )
    )
    if isinstance(result, Err):
        raise APIError.from_auth_error(result.error)

    return success_response(
        request,
        "Login successful",
        _dump(AuthSessionData.from_session(result.value)),
    )


@router.post(
    "/refresh",
    responses={
        400: {"description": "Missing refresh token"},
        401: {"description": "Invalid, revoked or expired refresh token"},
        404: {"description": "User no longer exists"},
    },
)
async def refresh(
    body: RefreshRequest,
    request: Request,
    auth_service: AuthServiceDep,
) -> JSONResponse:
    """Exchange a live refresh token for a new access token."""
    result = await auth_service.refresh(body.refresh_token)
    if isinstance(result, Err):
        raise APIError.from_auth_error(result.error)

    return success_response(
        request,
        "Token refreshed successfully",
        _dump(AccessTokenData.from_grant(result.value)),
    )


@router.post(
    "/logout",
    responses={401: {"description": "Not authenticated"}},
)
async def logout(
    request: Request,
    current_user: AuthenticatedUser,
    auth_service: AuthServiceDep,
    body: LogoutRequest | None = None,
) -> JSONResponse:
    """Revoke the supplied refresh token. Repeated logouts succeed."""
    await auth_service.logout(
        LogoutCommand(
            user_id=current_user.user_id,
            refresh_token=body.refresh_token if body else None,
            ip_address=get_client_ip(request),
        )
    )
    return success_response(request, "Logged out successfully", {})

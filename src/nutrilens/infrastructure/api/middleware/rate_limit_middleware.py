"""Rate limiting middleware for NutriLens.

Two limiters keyed by client IP:

- a strict limiter for the login and signup endpoints (brute-force guard);
- a general limiter for every other route under the API prefix.

Health endpoints are not limited.
"""

import math

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from nutrilens.core.config import get_settings
from nutrilens.core.logging import get_logger
from nutrilens.domain.entities import ErrorCode
from nutrilens.infrastructure.api.dependencies import get_client_ip
from nutrilens.infrastructure.api.errors import error_response
from nutrilens.infrastructure.api.middleware.rate_limit_storage import rate_limit_storage

logger = get_logger(__name__)

AUTH_LIMITED_PATHS = ("/auth/login", "/auth/signup")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Middleware to enforce rate limits on API requests."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process the request and enforce rate limits.

        Args:
            request: The incoming request.
            call_next: The next middleware/endpoint to call.

        Returns:
            The response from the application or a 429 error.
        """
        settings = get_settings()

        if not settings.rate_limit_enabled:
            return await call_next(request)

        path = request.url.path
        if not path.startswith(settings.api_prefix):
            return await call_next(request)

        client_ip = get_client_ip(request) or "unknown"
        if path[len(settings.api_prefix):] in AUTH_LIMITED_PATHS:
            limiter = "auth"
            limit = settings.auth_rate_limit_max
            window = settings.auth_rate_limit_window_seconds
            message = "Too many authentication attempts, please try again later."
        else:
            limiter = "api"
            limit = settings.rate_limit_max
            window = settings.rate_limit_window_seconds
            message = "Too many requests from this IP, please try again later."

        key = f"{limiter}:{client_ip}"
        is_allowed, remaining, reset_seconds = rate_limit_storage.consume(
            key, limit, window
        )

        if not is_allowed:
            retry_after = str(math.ceil(reset_seconds))
            logger.warning(
                "Rate limit exceeded",
                key=key,
                path=path,
                limit=limit,
                retry_after=retry_after,
            )
            return error_response(
                request,
                ErrorCode.RATE_LIMITED,
                message,
                headers={
                    "Retry-After": retry_after,
                    "X-RateLimit-Limit": str(limit),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": retry_after,
                },
            )

        response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(limit)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        response.headers["X-RateLimit-Reset"] = str(math.ceil(reset_seconds))

        return response

"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
and lifecycle handlers.
"""

import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from nutrilens.core.config import get_settings
from nutrilens.core.logging import (
    bind_request_id,
    clear_context,
    configure_logging,
    get_logger,
)
from nutrilens.domain.entities import ErrorCode
from nutrilens.infrastructure.api.errors import APIError, error_response
from nutrilens.infrastructure.api.middleware import (
    RateLimitMiddleware,
    SecurityHeadersMiddleware,
)
from nutrilens.infrastructure.persistence.database import (
    close_database,
    get_db_manager,
    init_database,
)

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# HTTP status -> error code for errors raised by Starlette/FastAPI itself
_CODE_BY_STATUS: dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION_ERROR,
    401: ErrorCode.UNAUTHORIZED,
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.NOT_FOUND,
    422: ErrorCode.VALIDATION_ERROR,
    429: ErrorCode.RATE_LIMITED,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Configures logging and initializes the database on startup; closes
    the database on shutdown.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control is yielded to the application during its lifetime.
    """
    settings = get_settings()
    configure_logging(settings)

    logger.info(
        "Starting NutriLens",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    try:
        await init_database()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    logger.info("Shutting down NutriLens")
    await close_database()
    logger.info("Database connection closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="NutriLens authentication API",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    # Added innermost first: rate limiting, security headers, CORS
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        expose_headers=[REQUEST_ID_HEADER],
    )

    register_health_check(app)
    register_routes(app)
    register_exception_handlers(app)

    # Outermost: request correlation and the unexpected-error boundary
    register_middleware(app)

    return app


def register_health_check(app: FastAPI) -> None:
    """Register health check endpoints.

    Args:
        app: FastAPI application instance.
    """

    @app.get("/health", tags=["health"])
    async def health_check():
        """Basic health check endpoint.

        Returns 200 if the service is running. Does not check
        database connectivity.
        """
        settings = get_settings()
        return {
            "status": "ok",
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/health/db", tags=["health"])
    async def database_health_check():
        """Database health check endpoint.

        Returns 200 when a trivial query succeeds, 503 otherwise.
        """
        db_healthy = await get_db_manager().check_connection()

        if db_healthy:
            return {"status": "ok", "database": "connected"}
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "error", "database": "disconnected"},
        )


def register_routes(app: FastAPI) -> None:
    """Register API routes.

    Args:
        app: FastAPI application instance.
    """
    from nutrilens.infrastructure.api.routes import auth_router

    settings = get_settings()

    app.include_router(auth_router, prefix=f"{settings.api_prefix}/auth", tags=["auth"])


def _validation_details(exc: RequestValidationError) -> list[dict[str, str]]:
    details = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        details.append({"field": ".".join(loc) or "body", "message": error.get("msg", "")})
    return details


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers that render the error envelope.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        return error_response(
            request, exc.code, exc.message, exc.details, headers=exc.headers
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Malformed JSON and wrong field types are reported as 400."""
        return error_response(
            request,
            ErrorCode.VALIDATION_ERROR,
            "Invalid request body",
            {"errors": _validation_details(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        code = _CODE_BY_STATUS.get(exc.status_code)
        if code is None:
            code = (
                ErrorCode.SERVER_ERROR
                if exc.status_code >= 500
                else ErrorCode.VALIDATION_ERROR
            )
        return error_response(
            request,
            code,
            str(exc.detail),
            headers=getattr(exc, "headers", None),
            status_code=exc.status_code,
        )


def register_middleware(app: FastAPI) -> None:
    """Register the request correlation middleware.

    Args:
        app: FastAPI application instance.
    """

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        """Bind a request ID, log the request, and catch unexpected errors."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        bind_request_id(request_id)

        logger.info(
            "Request started",
            method=request.method,
            path=str(request.url.path),
        )

        try:
            try:
                response = await call_next(request)
            except Exception as e:
                logger.exception(
                    "Unhandled exception",
                    method=request.method,
                    path=str(request.url.path),
                    exc_type=type(e).__name__,
                )
                response = error_response(
                    request,
                    ErrorCode.SERVER_ERROR,
                    "An unexpected error occurred",
                    {"detail": str(e)} if get_settings().debug else None,
                )

            logger.info(
                "Request completed",
                method=request.method,
                path=str(request.url.path),
                status_code=response.status_code,
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_context()


# Create the application instance
app = create_app()

"""HTTP error mapping and response envelopes.

Every API response uses one of two shapes:

    {"success": true,  "message": ..., "data": {...}, "requestId": ...}
    {"success": false, "error": <ErrorCode>, "message": ..., "details": ..., "requestId": ...}
"""

from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse

from nutrilens.domain.entities import AuthError, ErrorCode

STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EMAIL_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorCode.SERVER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class APIError(Exception):
    """Exception rendered as an error envelope by the registered handler."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details
        self.headers = headers
        self.status_code = STATUS_BY_CODE[code]

    @classmethod
    def from_auth_error(cls, error: AuthError) -> "APIError":
        return cls(error.code, error.message, error.details)


def get_request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def error_response(
    request: Request,
    code: ErrorCode,
    message: str,
    details: Any = None,
    headers: dict[str, str] | None = None,
    status_code: int | None = None,
) -> JSONResponse:
    """Build an error envelope.

    The status is mapped from ``code`` unless ``status_code`` is given.
    """
    content: dict[str, Any] = {
        "success": False,
        "error": code.value,
        "message": message,
    }
    if details is not None:
        content["details"] = details
    content["requestId"] = get_request_id(request)
    return JSONResponse(
        status_code=status_code or STATUS_BY_CODE[code],
        content=content,
        headers=headers,
    )


def success_response(
    request: Request,
    message: str,
    data: dict[str, Any],
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """Build a success envelope around already serialized ``data``."""
    return JSONResponse(
        status_code=status_code,
        content={
            "success": True,
            "message": message,
            "data": data,
            "requestId": get_request_id(request),
        },
    )

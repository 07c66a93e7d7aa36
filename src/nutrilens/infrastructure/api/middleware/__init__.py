"""HTTP middleware for rate limiting and security headers."""

from nutrilens.infrastructure.api.middleware.rate_limit_middleware import (
    RateLimitMiddleware,
)
from nutrilens.infrastructure.api.middleware.rate_limit_storage import (
    RateLimitStorage,
    rate_limit_storage,
)
from nutrilens.infrastructure.api.middleware.security_headers_middleware import (
    SecurityHeadersMiddleware,
)

__all__ = [
    "RateLimitMiddleware",
    "RateLimitStorage",
    "SecurityHeadersMiddleware",
    "rate_limit_storage",
]

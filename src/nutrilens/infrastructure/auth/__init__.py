"""Authentication infrastructure components.

This module provides password hashing and the JWT token codec.
"""

from nutrilens.infrastructure.auth.password_hasher import CredentialHasher
from nutrilens.infrastructure.auth.token_codec import (
    InvalidTokenError,
    TokenCodec,
    TokenExpiredError,
)

__all__ = [
    "CredentialHasher",
    "InvalidTokenError",
    "TokenCodec",
    "TokenExpiredError",
]

"""Auth configuration injected into the Auth Service and Token Codec.

Built once from application settings at startup so that core logic
never reads the environment itself.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any


@dataclass(frozen=True)
class AuthConfig:
    """Immutable auth configuration.

    Attributes:
        access_secret: HMAC key for access tokens.
        refresh_secret: HMAC key for refresh tokens (distinct from access_secret).
        issuer: ``iss`` claim for all tokens.
        audience: ``aud`` claim for access tokens.
        access_ttl: Access token lifetime.
        refresh_ttl: Refresh token lifetime.
        min_password_length: Minimum password length.
        require_uppercase: Require at least one A-Z.
        require_digit: Require at least one digit.
        require_special_char: Require at least one of ``!@#$%^&*``.
        hash_cost: Password hashing cost (Argon2 time cost).
    """

    access_secret: str
    refresh_secret: str
    issuer: str = "nutrilens.app"
    audience: str = "nutrilens-app"
    access_ttl: timedelta = timedelta(hours=1)
    refresh_ttl: timedelta = timedelta(days=7)
    min_password_length: int = 8
    require_uppercase: bool = False
    require_digit: bool = False
    require_special_char: bool = False
    hash_cost: int = 3

    def __post_init__(self) -> None:
        if not self.access_secret or not self.refresh_secret:
            raise ValueError("Token secrets are required")
        if self.access_secret == self.refresh_secret:
            raise ValueError("Access and refresh secrets must differ")
        if self.hash_cost < 1:
            raise ValueError("hash_cost must be at least 1")

    @classmethod
    def from_settings(cls, settings: Any) -> "AuthConfig":
        """Build the config from a Settings instance."""
        return cls(
            access_secret=settings.jwt_secret,
            refresh_secret=settings.jwt_refresh_secret,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            access_ttl=timedelta(seconds=settings.access_token_ttl_seconds),
            refresh_ttl=timedelta(seconds=settings.refresh_token_ttl_seconds),
            min_password_length=settings.password_min_length,
            require_uppercase=settings.password_require_uppercase,
            require_digit=settings.password_require_digit,
            require_special_char=settings.password_require_special_char,
            hash_cost=settings.password_hash_cost,
        )

    @property
    def access_ttl_seconds(self) -> int:
        return int(self.access_ttl.total_seconds())

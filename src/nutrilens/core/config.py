"""Configuration management for NutriLens.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded at application
startup and is immutable during runtime.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET = "change-me-in-production-use-openssl-rand-hex-32"
DEFAULT_REFRESH_SECRET = DEFAULT_SECRET + "-refresh"


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables and .env files.
    All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="NUTRILENS_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "NutriLens"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False
    api_prefix: str = "/v1"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 3000
    workers: int = 1
    # Comma-separated proxy addresses trusted to set X-Forwarded-For
    forwarded_allow_ips: str = "127.0.0.1"

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./data/nutrilens.db"
    db_pool_size: int = 20
    db_max_overflow: int = 10
    db_pool_timeout: int = 2
    db_pool_recycle: int = 3600
    db_echo: bool = False

    # Token Settings
    jwt_secret: str = Field(
        default=DEFAULT_SECRET,
        description="Secret key for access token signing",
    )
    jwt_refresh_secret: str = Field(
        default=DEFAULT_REFRESH_SECRET,
        description="Secret key for refresh token signing (must differ from jwt_secret)",
    )
    jwt_issuer: str = "nutrilens.app"
    jwt_audience: str = "nutrilens-app"
    access_token_ttl_seconds: int = 3600
    refresh_token_ttl_seconds: int = 7 * 24 * 60 * 60

    # Password Policy
    password_min_length: int = 8
    password_require_uppercase: bool = False
    password_require_digit: bool = False
    password_require_special_char: bool = False
    password_hash_cost: int = Field(
        default=3,
        ge=1,
        description="Argon2 time cost (iterations)",
    )

    # CORS Settings
    cors_origins: list[str] = Field(default=["http://localhost:3000"])
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]
    )
    cors_allow_headers: list[str] = Field(
        default=["Content-Type", "Authorization", "X-Request-ID"]
    )

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Rate Limiting Settings
    rate_limit_enabled: bool = True
    rate_limit_max: int = 100
    rate_limit_window_seconds: int = 15 * 60
    auth_rate_limit_max: int = 5
    auth_rate_limit_window_seconds: int = 60

    # Security Headers
    security_headers_enabled: bool = True
    hsts_max_age: int = 31536000
    csp_policy: str = "default-src 'self'; frame-ancestors 'none'"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    @model_validator(mode="after")
    def validate_production_secrets(self) -> "Settings":
        """Refuse to sign tokens with the built-in secrets in production."""
        if not self.is_production:
            return self
        if self.jwt_secret == DEFAULT_SECRET or self.jwt_refresh_secret == DEFAULT_REFRESH_SECRET:
            raise ValueError(
                "NUTRILENS_JWT_SECRET and NUTRILENS_JWT_REFRESH_SECRET must be set "
                "in production. Generate them with `openssl rand -hex 32`."
            )
        if self.jwt_secret == self.jwt_refresh_secret:
            raise ValueError(
                "NUTRILENS_JWT_REFRESH_SECRET must differ from NUTRILENS_JWT_SECRET."
            )
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    This function caches the settings instance to avoid reloading
    configuration on every call. Settings are loaded once at startup.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()

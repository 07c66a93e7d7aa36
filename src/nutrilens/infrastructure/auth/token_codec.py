"""JWT token codec.

Signs and verifies the two bearer token kinds:

- access tokens: short-lived, self-contained, validated by signature and
  expiry alone on every request;
- refresh tokens: longer-lived, signed with a separate secret and only
  honoured while their digest is live in the token store.
"""

import hashlib
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from nutrilens.domain.entities.auth_config import AuthConfig


class InvalidTokenError(Exception):
    """Raised when a token fails any verification step."""

    pass


class TokenExpiredError(InvalidTokenError):
    """Raised when a token's ``exp`` claim is in the past."""

    pass


class TokenCodec:
    """Issue and verify access/refresh tokens.

    A pure function of the injected config: no I/O, no side effects.
    """

    ALGORITHM = "HS256"
    REFRESH_TYPE = "refresh"

    def __init__(self, config: AuthConfig) -> None:
        """Initialize the codec.

        Args:
            config: Auth configuration holding secrets, issuer, audience and TTLs.
        """
        self._config = config

    @property
    def access_ttl_seconds(self) -> int:
        return self._config.access_ttl_seconds

    @property
    def refresh_ttl(self) -> timedelta:
        return self._config.refresh_ttl

    def issue_access(
        self,
        user_id: str,
        email: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create an access token.

        Args:
            user_id: The user's unique identifier (``sub``).
            email: The user's email address.
            expires_delta: Custom lifetime. Defaults to the configured access TTL.

        Returns:
            Encoded JWT access token.
        """
        if expires_delta is None:
            expires_delta = self._config.access_ttl

        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "email": email,
            "iss": self._config.issuer,
            "aud": self._config.audience,
            "iat": now,
            "exp": now + expires_delta,
        }
        return jwt.encode(payload, self._config.access_secret, algorithm=self.ALGORITHM)

    def issue_refresh(self, user_id: str, expires_delta: timedelta | None = None) -> str:
        """Create a refresh token.

        A random ``jti`` keeps tokens (and their digests) unique even when
        two are issued for the same user within one second.

        Args:
            user_id: The user's unique identifier (``sub``).
            expires_delta: Custom lifetime. Defaults to the configured refresh TTL.

        Returns:
            Encoded JWT refresh token.
        """
        if expires_delta is None:
            expires_delta = self._config.refresh_ttl

        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "type": self.REFRESH_TYPE,
            "iss": self._config.issuer,
            "iat": now,
            "exp": now + expires_delta,
            "jti": str(uuid.uuid4()),
        }
        return jwt.encode(payload, self._config.refresh_secret, algorithm=self.ALGORITHM)

    def verify_access(self, token: str) -> dict[str, Any]:
        """Verify an access token.

        Checks signature, issuer, audience and expiry.

        Returns:
            Decoded claims.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: On any other failure.
        """
        return self._decode(
            token,
            self._config.access_secret,
            audience=self._config.audience,
            required=["sub", "email", "iss", "aud", "iat", "exp"],
        )

    def verify_refresh(self, token: str) -> dict[str, Any]:
        """Verify a refresh token.

        Checks signature, issuer, expiry and the ``type`` discriminant.

        Returns:
            Decoded claims.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: On any other failure, including a wrong type.
        """
        payload = self._decode(
            token,
            self._config.refresh_secret,
            audience=None,
            required=["sub", "type", "iss", "iat", "exp"],
        )
        if payload.get("type") != self.REFRESH_TYPE:
            raise InvalidTokenError("Not a refresh token")
        return payload

    @staticmethod
    def hash_token(token: str) -> str:
        """Hash a token using SHA-256.

        Used for refresh-token storage lookups only.

        Args:
            token: The raw token string.

        Returns:
            SHA-256 hex digest of the token.
        """
        # surrogatepass: any str a JSON body can carry has a digest
        return hashlib.sha256(token.encode("utf-8", "surrogatepass")).hexdigest()

    def _decode(
        self,
        token: str,
        secret: str,
        audience: str | None,
        required: list[str],
    ) -> dict[str, Any]:
        if not token or not isinstance(token, str):
            raise InvalidTokenError("Token is empty")
        try:
            return jwt.decode(
                token,
                secret,
                algorithms=[self.ALGORITHM],
                issuer=self._config.issuer,
                audience=audience,
                options={"require": required},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Invalid token") from e
        except UnicodeError as e:
            raise InvalidTokenError("Token is not valid UTF-8") from e

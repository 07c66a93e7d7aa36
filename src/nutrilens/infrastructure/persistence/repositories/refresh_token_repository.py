"""Repository for refresh token operations.

This is the token store: it records issued refresh tokens by their SHA-256
digest and answers whether a given token is still live. Liveness is
evaluated in SQL so naive SQLite timestamps are never compared with aware
Python datetimes.
"""

from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from nutrilens.core.clock import utcnow
from nutrilens.infrastructure.persistence.models import RefreshTokenModel


class RefreshTokenRepository:
    """Repository for refresh token database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    @staticmethod
    def _live(token_hash: str, now: datetime) -> ColumnElement[bool]:
        return (
            (RefreshTokenModel.token_hash == token_hash)
            & (RefreshTokenModel.revoked == False)  # noqa: E712
            & (RefreshTokenModel.expires_at > now)
        )

    async def record(
        self,
        user_id: str,
        token_hash: str,
        expires_at: datetime,
        device_id: str | None = None,
        platform: str | None = None,
        ip_address: str | None = None,
    ) -> str:
        """Store a newly issued refresh token.

        Args:
            user_id: Owner of the token.
            token_hash: SHA-256 hex digest of the raw token.
            expires_at: When the token stops being accepted.
            device_id: Optional client device identifier.
            platform: Optional client platform (ios, android, web).
            ip_address: Optional client IP address.

        Returns:
            The ID of the stored record.
        """
        model = RefreshTokenModel(
            user_id=user_id,
            token_hash=token_hash,
            expires_at=expires_at,
            device_id=device_id,
            platform=platform,
            ip_address=ip_address,
            revoked=False,
        )
        self._session.add(model)
        await self._session.flush()
        return model.id

    async def is_live(self, token_hash: str) -> bool:
        """Check if a refresh token is present, not revoked and not expired.

        Args:
            token_hash: SHA-256 hex digest of the raw token.

        Returns:
            True if the token is live, False otherwise.
        """
        return await self.resolve_user(token_hash) is not None

    async def resolve_user(self, token_hash: str) -> str | None:
        """Return the owning user ID of a live refresh token.

        Args:
            token_hash: SHA-256 hex digest of the raw token.

        Returns:
            The user ID, or None if the token is unknown, revoked or expired.
        """
        result = await self._session.execute(
            select(RefreshTokenModel.user_id)
            .where(self._live(token_hash, utcnow()))
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def revoke(self, token_hash: str) -> bool:
        """Revoke a refresh token.

        Revoking an unknown or already revoked token is a no-op; ``revoked_at``
        keeps the time of the first revocation.

        Args:
            token_hash: SHA-256 hex digest of the raw token.

        Returns:
            True if a token transitioned to revoked, False otherwise.
        """
        result = await self._session.execute(
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.token_hash == token_hash,
                RefreshTokenModel.revoked == False,  # noqa: E712
            )
            .values(revoked=True, revoked_at=utcnow())
        )
        return result.rowcount > 0

    async def delete_expired(self, now: datetime | None = None) -> int:
        """Delete records whose expiry has passed.

        Args:
            now: Reference time; defaults to the current UTC time.

        Returns:
            Number of records deleted.
        """
        result = await self._session.execute(
            delete(RefreshTokenModel).where(
                RefreshTokenModel.expires_at <= (now or utcnow())
            )
        )
        return result.rowcount

"""Audit log repository for write-only audit trail operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from nutrilens.infrastructure.persistence.models import AuditLogModel


class AuditLogRepository:
    """Repository for audit log database operations.

    Only creation and lookup are provided; entries are never updated or
    deleted through this repository.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(
        self,
        action: str,
        user_id: str | None = None,
        status: str = "SUCCESS",
        ip_address: str | None = None,
    ) -> AuditLogModel:
        """Append an audit log entry.

        Args:
            action: Event name, e.g. USER_LOGIN.
            user_id: User the event belongs to.
            status: Outcome of the event.
            ip_address: Client IP address.

        Returns:
            The created audit log entry.
        """
        entry = AuditLogModel(
            action=action,
            user_id=user_id,
            status=status,
            ip_address=ip_address,
        )
        self.session.add(entry)
        await self.session.flush()
        return entry

    async def list_for_user(self, user_id: str) -> list[AuditLogModel]:
        """List audit entries for a user, oldest first."""
        result = await self.session.execute(
            select(AuditLogModel)
            .where(AuditLogModel.user_id == user_id)
            .order_by(AuditLogModel.created_at)
        )
        return list(result.scalars().all())

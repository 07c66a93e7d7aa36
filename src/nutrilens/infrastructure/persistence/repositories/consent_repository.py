"""Consent repository for recording policy and preference decisions."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from nutrilens.infrastructure.persistence.models import ConsentRecordModel, ConsentType


class ConsentRepository:
    """Repository for consent record database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def record_many(
        self,
        user_id: str,
        decisions: dict[ConsentType, bool],
        ip_address: str | None = None,
    ) -> list[ConsentRecordModel]:
        """Insert one consent row per decision.

        Args:
            user_id: User the consents belong to.
            decisions: Mapping of consent type to whether it was granted.
            ip_address: IP address the consent was given from.

        Returns:
            The created consent records.
        """
        records = [
            ConsentRecordModel(
                user_id=user_id,
                consent_type=consent_type.value,
                granted=granted,
                ip_address=ip_address,
            )
            for consent_type, granted in decisions.items()
        ]
        self.session.add_all(records)
        await self.session.flush()
        return records

    async def list_for_user(self, user_id: str) -> list[ConsentRecordModel]:
        """List all consent records for a user, oldest first."""
        result = await self.session.execute(
            select(ConsentRecordModel)
            .where(ConsentRecordModel.user_id == user_id)
            .order_by(ConsentRecordModel.timestamp)
        )
        return list(result.scalars().all())

"""SQLAlchemy model for the consent_records table.

One row per consent type is written when a user signs up.
"""

import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from nutrilens.core.clock import utcnow
from nutrilens.infrastructure.persistence.database import Base


class ConsentType(str, Enum):
    TERMS = "TERMS"
    PRIVACY = "PRIVACY"
    GDPR = "GDPR"
    MARKETING = "MARKETING"
    ANALYTICS = "ANALYTICS"


class ConsentRecordModel(Base):
    """A single consent decision made by a user."""

    __tablename__ = "consent_records"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    consent_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        index=True,
    )
    granted: Mapped[bool] = mapped_column(Boolean, nullable=False)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    def __repr__(self) -> str:
        return (
            f"ConsentRecordModel(user_id={self.user_id!r}, "
            f"consent_type={self.consent_type!r}, granted={self.granted!r})"
        )

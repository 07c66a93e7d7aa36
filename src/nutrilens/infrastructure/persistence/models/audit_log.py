"""SQLAlchemy model for the audit_logs table.

Authentication events (signup, login, logout) are appended here.
Entries are write-once; the auth core never updates or deletes them.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from nutrilens.core.clock import utcnow
from nutrilens.infrastructure.persistence.database import Base


class AuditLogModel(Base):
    """SQLAlchemy model for the audit_logs table.

    Attributes:
        id: Primary key (UUID string).
        user_id: User the event belongs to (nullable once the user is removed).
        action: Event name, e.g. USER_LOGIN.
        status: Outcome, e.g. SUCCESS.
        ip_address: IP address of the client.
        created_at: When the event was recorded (UTC).
    """

    __tablename__ = "audit_logs"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    user_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    action: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    status: Mapped[str | None] = mapped_column(String(20), nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )

    def __repr__(self) -> str:
        return f"AuditLogModel(user_id={self.user_id!r}, action={self.action!r}, status={self.status!r})"

"""SQLAlchemy models for NutriLens auth tables.

All models inherit from the Base class defined in database.py and are
created on application startup outside production.
"""

from nutrilens.infrastructure.persistence.models.audit_log import AuditLogModel
from nutrilens.infrastructure.persistence.models.consent_record import (
    ConsentRecordModel,
    ConsentType,
)
from nutrilens.infrastructure.persistence.models.refresh_token import RefreshTokenModel
from nutrilens.infrastructure.persistence.models.user import UserModel

__all__ = [
    "AuditLogModel",
    "ConsentRecordModel",
    "ConsentType",
    "RefreshTokenModel",
    "UserModel",
]

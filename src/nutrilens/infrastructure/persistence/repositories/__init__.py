"""Persistence repositories for database operations."""

from nutrilens.infrastructure.persistence.repositories.audit_log_repository import (
    AuditLogRepository,
)
from nutrilens.infrastructure.persistence.repositories.consent_repository import (
    ConsentRepository,
)
from nutrilens.infrastructure.persistence.repositories.refresh_token_repository import (
    RefreshTokenRepository,
)
from nutrilens.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "AuditLogRepository",
    "ConsentRepository",
    "RefreshTokenRepository",
    "UserRepository",
]

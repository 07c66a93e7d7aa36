"""Application services."""

from nutrilens.application.services.auth_service import AuthService

__all__ = ["AuthService"]

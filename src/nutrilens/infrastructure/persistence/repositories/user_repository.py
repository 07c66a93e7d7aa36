"""User repository for database operations."""

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from nutrilens.core.clock import utcnow
from nutrilens.infrastructure.persistence.models import UserModel


def _active():
    return UserModel.deleted_at.is_(None)


class UserRepository:
    """Repository for user database operations.

    Lookups only ever return users that have not been soft-deleted.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, user: UserModel) -> UserModel:
        """Create a new user.

        Args:
            user: User model to create.

        Returns:
            Created user model.
        """
        self.session.add(user)
        await self.session.flush()
        return user

    async def get_by_id(self, user_id: str) -> UserModel | None:
        """Get an active user by ID.

        Args:
            user_id: User ID (UUID string).

        Returns:
            User model if found and not deleted, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id, _active())
        )
        return result.scalar_one_or_none()

    async def get_active_by_email(self, email: str) -> UserModel | None:
        """Get an active user by their normalized email.

        Args:
            email: Lower-cased email address.

        Returns:
            User model if found and not deleted, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email, _active())
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """Check if an active user already holds an email.

        Args:
            email: Lower-cased email address.

        Returns:
            True if the email is taken, False otherwise.
        """
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.email == email, _active()).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def update_last_login(self, user_id: str, at: datetime | None = None) -> datetime:
        """Update the last_login timestamp for a user.

        Args:
            user_id: ID of the user to update.
            at: Login time; defaults to now.

        Returns:
            The timestamp that was stored.
        """
        at = at or utcnow()
        await self.session.execute(
            update(UserModel).where(UserModel.id == user_id).values(last_login=at)
        )
        await self.session.flush()
        return at

    async def update_password_hash(self, user_id: str, password_hash: str) -> None:
        """Replace a user's password hash, e.g. after a cost upgrade.

        Args:
            user_id: ID of the user to update.
            password_hash: New argon2 hash.
        """
        await self.session.execute(
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(password_hash=password_hash, updated_at=utcnow())
        )
        await self.session.flush()

"""User Repository — account lookups, uniqueness checks and erasure statements."""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from mini_notes.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Persistence for User rows."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_active_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User)
            .where(User.email == email)
            .where(User.deleted_at.is_(None)),
        )
        return result.scalar_one_or_none()

    async def find_active_by_id(self, user_id: int) -> User | None:
        result = await self.db.execute(
            select(User)
            .where(User.id == user_id)
            .where(User.deleted_at.is_(None)),
        )
        return result.scalar_one_or_none()

    async def email_in_use(
        self, email: str, exclude_user_id: int | None = None,
    ) -> bool:
        query = select(User.id).where(User.email == email)
        if exclude_user_id is None:
            query = query.where(User.deleted_at.is_(None))
        else:
            query = query.where(User.id != exclude_user_id)
        result = await self.db.execute(query.limit(1))
        return result.first() is not None

    async def username_in_use(
        self, username: str, exclude_user_id: int | None = None,
    ) -> bool:
        query = select(User.id).where(User.username == username)
        if exclude_user_id is None:
            query = query.where(User.deleted_at.is_(None))
        else:
            query = query.where(User.id != exclude_user_id)
        result = await self.db.execute(query.limit(1))
        return result.first() is not None

    async def create(
        self, username: str, email: str, password_hash: str, tos_version: str,
    ) -> User:
        user = User(
            username=username,
            email=email,
            password_hash=password_hash,
            tos_accepted_at=datetime.now(timezone.utc),
            tos_version_accepted=tos_version,
        )
        self.db.add(user)
        await self.db.flush()
        return user

    async def update_profile(
        self, user: User, username: str | None, email: str | None,
    ) -> User:
        if username is not None:
            user.username = username
        if email is not None:
            user.email = email
        user.updated_at = datetime.now(timezone.utc)
        await self.db.flush()
        return user

    async def mark_deleted(self, user_id: int) -> None:
        """Stamp deleted_at (audit marker inside the erasure transaction)."""
        await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(deleted_at=datetime.now(timezone.utc)),
        )

    async def hard_delete(self, user_id: int) -> int:
        result = await self.db.execute(
            delete(User).where(User.id == user_id),
        )
        return result.rowcount

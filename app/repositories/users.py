"""SQLAlchemy-backed user repository."""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError
from app.db.base import utcnow
from app.models.user import User

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "User with this email already exists"


def _is_uuid(value: str) -> bool:
    try:
        UUID(str(value))
    except ValueError:
        return False
    return True


class SQLUserRepository:
    """User persistence over an AsyncSession; every write is its own transaction."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, user_id: str) -> User | None:
        # A non-UUID id would make PostgreSQL raise instead of returning no rows
        if not _is_uuid(user_id):
            return None
        result = await self.session.execute(select(User).where(User.id == str(user_id)))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def list_all(self) -> list[User]:
        result = await self.session.execute(select(User).order_by(User.created_at.desc()))
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(User))
        return int(result.scalar_one())

    async def add(self, user: User) -> User:
        self.session.add(user)
        return await self._commit(user)

    async def save(self, user: User) -> User:
        return await self._commit(user)

    async def touch_last_login(self, user: User) -> User:
        user.last_login_at = utcnow()
        return await self._commit(user)

    async def _commit(self, user: User) -> User:
        # rollback() expires the instance, so read what the log needs first
        user_id = user.id
        # The unique index on email is the authoritative duplicate guard
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.info("Unique constraint rejected write for user %s: %s", user_id, e.orig)
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE) from e
        await self.session.refresh(user)
        return user

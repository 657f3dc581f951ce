"""SQLAlchemy-backed token blocklist."""

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.base import utcnow
from app.models.revoked_token import RevokedToken


class SQLTokenBlocklist:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def revoke(self, jti: str, user_id: str, expires_at: datetime) -> None:
        # Revoking the same token twice (e.g. a retried logout) is not an error
        stmt = (
            insert(RevokedToken)
            .values(jti=jti, user_id=user_id, expires_at=expires_at, revoked_at=utcnow())
            .on_conflict_do_nothing(index_elements=[RevokedToken.jti])
        )
        await self.session.execute(stmt)
        await self.session.commit()

    async def is_revoked(self, jti: str) -> bool:
        result = await self.session.execute(
            select(RevokedToken.jti).where(RevokedToken.jti == jti)
        )
        return result.scalar_one_or_none() is not None

    async def purge_expired(self) -> int:
        result = await self.session.execute(
            delete(RevokedToken).where(RevokedToken.expires_at < utcnow())
        )
        await self.session.commit()
        return result.rowcount or 0

"""Database engine and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from app.config import Settings


class Database:
    """Owns the async engine and the session factory for one application."""

    def __init__(
        self,
        url: str,
        *,
        echo: bool = False,
        pool_size: int = 10,
        max_overflow: int = 20,
        use_pool: bool = True,
    ) -> None:
        engine_kw: dict = {"echo": echo, "pool_pre_ping": True}
        if use_pool:
            engine_kw.update(pool_size=pool_size, max_overflow=max_overflow)
        else:
            # Function-per-request hosts cannot keep connections between invocations
            engine_kw["poolclass"] = NullPool

        self.engine: AsyncEngine = create_async_engine(url, **engine_kw)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            str(settings.database_url),
            echo=settings.debug,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            use_pool=not settings.is_serverless,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session that commits on success and rolls back on error."""
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def ping(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    """Return the application's Database, creating it on first use.

    Standalone deployments build it in the lifespan handler; serverless
    hosts may never run the lifespan, so it is created lazily here.
    """
    state = request.app.state
    database = getattr(state, "database", None)
    if database is None:
        database = Database.from_settings(state.settings)
        state.database = database
    return database


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency that provides a database session."""
    async with get_database(request).session() as session:
        yield session

"""Database connection and session management.

The engine and session factory live on a ``Database`` object that the
application builds once in its lifespan and stores on ``app.state.db``.
Request handlers receive an ``AsyncSession`` through the ``get_db``
dependency instead of importing a module-level client.
"""
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ..config import Settings
from .models.base import Base


class Database:
    """Owns the async engine and the session factory for one process."""

    def __init__(
        self,
        url: str,
        *,
        echo: bool = False,
        pool_size: int | None = None,
        max_overflow: int | None = None,
        connect_args: dict | None = None,
    ):
        engine_kwargs: dict = {"echo": echo, "connect_args": connect_args or {}}
        # SQLite drivers use a single-connection pool that rejects sizing options
        if not url.startswith("sqlite"):
            engine_kwargs.update(
                pool_pre_ping=True,
                pool_size=pool_size or 5,
                max_overflow=max_overflow or 10,
                pool_timeout=10,
                pool_recycle=3600,
            )
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def create_all(self) -> None:
        """Create tables directly from the models (development only; use Alembic elsewhere)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Close database connections."""
        await self.engine.dispose()


def create_database(settings: Settings) -> Database:
    """Build the process-wide Database from settings."""
    connect_args: dict = {}
    if settings.is_production and settings.database_url.startswith("postgresql"):
        connect_args["ssl"] = "require"
    return Database(
        settings.database_url,
        echo=settings.database_echo,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        connect_args=connect_args,
    )


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting a request-scoped database session."""
    database: Database = request.app.state.db
    async with database.session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise

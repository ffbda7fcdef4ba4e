"""Database handle and session management.

Provides the async SQLAlchemy engine and session factory wrapped in a
``Database`` object that the application opens at startup and disposes
at shutdown.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

logger = structlog.get_logger()

# Base class for models
Base = declarative_base()


class Database:
    """Lifecycle-scoped handle to the persistence store.

    Example usage:
        database = Database(settings.database_url)
        await database.create_all()
        async with database.session() as session:
            ...
        await database.dispose()
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        """Create the engine and session factory.

        Args:
            url: SQLAlchemy async connection string.
            echo: Whether to log emitted SQL.
        """
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, **self._engine_options(url, echo))
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @staticmethod
    def _engine_options(url: str, echo: bool) -> dict[str, Any]:
        # In-memory SQLite lives inside a single connection
        if url.startswith("sqlite") and ":memory:" in url:
            return {
                "echo": echo,
                "poolclass": StaticPool,
                "connect_args": {"check_same_thread": False},
            }
        return {"echo": echo, "pool_pre_ping": True}

    async def create_all(self) -> None:
        """Create all tables that do not exist yet."""
        # Register mapped classes on Base.metadata
        import productdesk.catalog.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """Check store connectivity.

        Returns:
            True if a trivial query succeeds.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("Database ping failed", error=str(e))
            return False
        return True

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Open a unit-of-work session.

        Commits when the block exits cleanly and rolls back otherwise.

        Yields:
            AsyncSession for database operations.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()

"""
Database session management and configuration - async SQLAlchemy.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from loguru import logger
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from support_dispatch.config.settings import settings
from support_dispatch.models.domain import Base


class Database:
    """
    Async database connection manager

    Owns the engine and the session factory used by the record store.
    """

    def __init__(self, url: Optional[str] = None, echo: bool = False):
        """
        Initialize database engine

        Args:
            url: SQLAlchemy async URL (defaults to settings.database_url_resolved)
            echo: Log emitted SQL
        """
        self.url = url or settings.database_url_resolved

        engine_kwargs = {"echo": echo}
        if self.url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in self.url:
                # One shared connection, otherwise every session sees an empty database
                engine_kwargs["poolclass"] = StaticPool

        self.engine: AsyncEngine = create_async_engine(self.url, **engine_kwargs)

        if self.url.startswith("sqlite"):
            self._register_sqlite_pragmas()

        self.session_factory = async_sessionmaker(
            self.engine,
            expire_on_commit=False,
            autoflush=False,
        )

        logger.info(f"Database configured: {self.engine.url.render_as_string(hide_password=True)}")

    def _register_sqlite_pragmas(self):
        """Enable foreign keys and a busy timeout on every new SQLite connection."""
        @event.listens_for(self.engine.sync_engine, "connect")
        def set_sqlite_pragmas(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            try:
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.execute("PRAGMA busy_timeout=5000")
            finally:
                cursor.close()

    async def init_models(self):
        """
        Create all tables.
        Safe to call multiple times.
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ready")

    async def drop_models(self):
        """Drop all tables. Use with caution!"""
        logger.warning("Dropping all database tables!")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Session with commit on success and rollback on error.

        Usage:
            async with db.session() as session:
                order = await session.get(Order, "ORD-1001")
        """
        session = self.session_factory()
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error(f"Database error: {e}")
            raise
        finally:
            await session.close()

    async def dispose(self):
        """Close all pooled connections."""
        await self.engine.dispose()
        logger.debug("Database engine disposed")

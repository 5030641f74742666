"""
GameClub Database Configuration

Async SQLAlchemy engine and session management:
- Connection pooling for PostgreSQL (asyncpg)
- Connection retry with exponential backoff at startup
- Schema auto-migration from the ORM metadata
- One session per request; stores commit each write themselves
"""

import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

import structlog
from sqlalchemy import event, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..models import Base
from .config import get_settings

logger = structlog.get_logger()


def enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ignores foreign keys (and ON DELETE CASCADE) unless asked."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseManager:
    """
    Database connection manager.

    ``initialize`` must run before sessions are requested; the FastAPI
    lifespan does this once per process.
    """

    def __init__(self, database_url: Optional[str] = None):
        self.settings = get_settings()
        self.database_url = database_url or self.settings.DATABASE_URL
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker] = None

    def _create_engine(self) -> AsyncEngine:
        engine_kwargs: Dict[str, Any] = {"echo": self.settings.DATABASE_ECHO}
        if self.database_url.startswith("postgresql"):
            engine_kwargs.update(
                pool_size=self.settings.DATABASE_POOL_SIZE,
                pool_pre_ping=True,  # Validate connections before use
                pool_recycle=3600,
            )
        engine = create_async_engine(self.database_url, **engine_kwargs)
        if self.database_url.startswith("sqlite"):
            event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)
        return engine

    async def initialize(self) -> None:
        """Create the engine, verify connectivity and create missing tables."""
        if self.engine is not None:
            return

        start_time = time.time()
        self.engine = self._create_engine()
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.settings.DATABASE_CONNECT_RETRIES),
                wait=wait_exponential(multiplier=1, min=1, max=10),
                retry=retry_if_exception_type((OperationalError, OSError)),
                before_sleep=lambda retry_state: logger.warning(
                    "Database connection retry",
                    attempt=retry_state.attempt_number,
                ),
                reraise=True,
            ):
                with attempt:
                    await self._migrate()

        except Exception as e:
            logger.error(
                "Database initialization failed",
                error=str(e),
                exc_info=True,
            )
            await self.close()
            raise

        logger.info(
            "Database initialized",
            duration_seconds=round(time.time() - start_time, 3),
        )

    async def _migrate(self) -> None:
        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            await conn.run_sync(Base.metadata.create_all)

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get database session with transaction management.

        Commits when the caller's block succeeds, rolls back and re-raises
        otherwise.
        """
        if not self.session_factory:
            raise RuntimeError("Database not initialized. Call initialize() first.")

        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                await session.rollback()
                logger.debug("Database transaction rolled back", error=str(e))
                raise

    async def health_check(self) -> Dict[str, Any]:
        """Run ``SELECT 1`` and report latency."""
        start_time = time.time()

        try:
            async with self.get_session() as session:
                await session.execute(text("SELECT 1"))

            return {
                "status": "healthy",
                "duration_seconds": round(time.time() - start_time, 4),
            }

        except Exception as e:
            logger.error("Database health check failed", error=str(e))
            return {
                "status": "unhealthy",
                "duration_seconds": round(time.time() - start_time, 4),
                "error": str(e),
            }

    async def close(self) -> None:
        """Close database connections and cleanup resources."""
        if self.engine:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None

            logger.info("Database connections closed")


# Global database manager instance
database_manager = DatabaseManager()


async def get_database_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a request-scoped session."""
    async with database_manager.get_session() as session:
        yield session

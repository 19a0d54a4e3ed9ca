"""
Database engine and session scope.

PostgreSQL (asyncpg) in deployed environments with a connection pool;
SQLite (aiosqlite) for local runs and tests, on a single shared
connection so an in-memory database lives as long as the engine.

The URL carries the database password: log the dialect, never the URL.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from sqlalchemy import JSON, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from senali.config import get_settings
from senali.config.logging_config import get_logger

logger = get_logger(__name__)

JSONType = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    pass


def _engine_options(url: str, pool_size: int, max_overflow: int) -> dict[str, Any]:
    if url.startswith("sqlite"):
        return {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    return {
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }


class DatabaseManager:
    """
    Owns the engine for the lifetime of the process.

        db = DatabaseManager()
        await db.initialize()
        async with db.session() as session:
            ...
        await db.close()
    """

    def __init__(self) -> None:
        self._engine: Optional[AsyncEngine] = None
        self._sessions: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def engine(self) -> Optional[AsyncEngine]:
        return self._engine

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    async def initialize(self, url: Optional[str] = None) -> None:
        """Create the engine. `url` overrides the configured database."""
        if self._engine is not None:
            logger.warning("Database already initialized")
            return

        settings = get_settings()
        database_url = url or settings.database.async_url
        self._engine = create_async_engine(
            database_url,
            echo=settings.debug,
            **_engine_options(
                database_url,
                settings.database.pool_size,
                settings.database.max_overflow,
            ),
        )
        self._sessions = async_sessionmaker(
            self._engine,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info("Database engine created", dialect=self._engine.dialect.name)

    def _require_engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database not initialized. Call initialize() first.")
        return self._engine

    async def create_all(self) -> None:
        """Create missing tables. Deployed databases are migrated with Alembic instead."""
        engine = self._require_engine()

        import senali.infrastructure.database.models  # noqa: F401

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """One unit of work: committed on normal exit, rolled back on error."""
        self._require_engine()
        async with self._sessions() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def health_check(self) -> bool:
        if self._engine is None:
            return False
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.error("Database unreachable", error=str(e))
            return False
        return True

    async def close(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessions = None
        logger.info("Database engine disposed")


_db_manager: Optional[DatabaseManager] = None


def get_db_manager() -> DatabaseManager:
    """Process-wide DatabaseManager."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    async with get_db_manager().session() as session:
        yield session

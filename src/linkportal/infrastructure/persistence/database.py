"""Async SQLAlchemy engine and sessions for the link store.

SQLite (aiosqlite) is the default backend; any async SQLAlchemy URL works.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from linkportal.core.config import get_settings
from linkportal.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Declarative base for the link store tables."""


class DatabaseManager:
    """Owns the engine and session factory for one database URL.

    Both are created lazily on first use and released by ``disconnect``.
    """

    def __init__(self, database_url: str | None = None) -> None:
        self.settings = get_settings()
        self.database_url = database_url or self.settings.database_url
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            options: dict = {"echo": self.settings.db_echo}
            if self.is_sqlite:
                options["connect_args"] = {"check_same_thread": False}
            else:
                options.update(
                    pool_size=self.settings.db_pool_size,
                    max_overflow=self.settings.db_max_overflow,
                    pool_timeout=self.settings.db_pool_timeout,
                    pool_recycle=self.settings.db_pool_recycle,
                )
            self._engine = create_async_engine(self.database_url, **options)
            logger.info(
                "Link store engine created",
                database_url=self._engine.url.render_as_string(hide_password=True),
            )
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
        return self._session_factory

    async def create_tables(self) -> None:
        """Create the link and API key tables if they do not exist."""
        from linkportal.infrastructure.persistence import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Link store tables ready")

    async def disconnect(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Link store engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session; roll back if the block raises.

        Example:
            async with db.session() as session:
                links = (await session.execute(select(CorporateLinkModel))).scalars().all()
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def check_connection(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.error("Link store connection check failed", error=str(e))
            return False
        return True


_db_manager: DatabaseManager | None = None


def get_db_manager() -> DatabaseManager:
    """Process-wide DatabaseManager for the configured URL."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a session from the global manager."""
    async with get_db_manager().session() as session:
        yield session


async def init_database() -> None:
    """Connect to the link store and create missing tables.

    Raises:
        RuntimeError: If the database cannot be reached.
    """
    db = get_db_manager()

    if db.is_sqlite and ":memory:" not in db.database_url:
        # sqlite+aiosqlite:///path/to/file.db
        Path(db.database_url.split(":///")[-1]).parent.mkdir(parents=True, exist_ok=True)

    if not await db.check_connection():
        raise RuntimeError("Failed to connect to the link store database")

    await db.create_tables()


async def close_database() -> None:
    global _db_manager
    if _db_manager is not None:
        await _db_manager.disconnect()
        _db_manager = None

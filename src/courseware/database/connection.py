"""
Database connection management
"""

import threading
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from ..config import get_database_url, settings
from ..logging import get_logger
from .models import Base

logger = get_logger(__name__)

# Shared connection pool
_async_engine: AsyncEngine | None = None
_async_session_local: async_sessionmaker[AsyncSession] | None = None
_init_lock = threading.Lock()


def reset_database() -> None:
    """Reset database connections (for tests)."""
    global _async_engine, _async_session_local
    _async_engine = None
    _async_session_local = None


def init_database(database_url: str | None = None, force_reinit: bool = False) -> None:
    """Initialize the shared async connection pool."""
    global _async_engine, _async_session_local

    if _async_engine is not None and not force_reinit and database_url is None:
        return

    with _init_lock:
        if _async_engine is not None and not force_reinit and database_url is None:
            return

        db_url = database_url or get_database_url()

        engine_kwargs = {"echo": settings.sql_echo}
        if db_url.startswith("postgresql"):
            engine_kwargs["pool_size"] = settings.database_pool_size
            engine_kwargs["max_overflow"] = settings.database_max_overflow

        _async_engine = create_async_engine(db_url, **engine_kwargs)
        _async_session_local = async_sessionmaker(
            _async_engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )
        logger.info("Database initialized", database_url=_async_engine.url.render_as_string())


def get_async_engine() -> AsyncEngine:
    """Get the shared async SQLAlchemy engine."""
    if _async_engine is None:
        init_database()
    assert _async_engine is not None
    return _async_engine


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session from the shared pool; commits on clean exit."""
    if _async_session_local is None:
        init_database()

    if _async_session_local is None:
        raise RuntimeError("Database not initialized")

    async with _async_session_local() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def check_database_connection() -> tuple[bool, str | None]:
    """
    Test the database connection.

    Returns:
        tuple: (success: bool, error_message: str | None)
    """
    try:
        async with get_async_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
            return True, None
    except Exception as e:
        error_str = str(e)
        if "Connection refused" in error_str or "could not connect" in error_str:
            return False, (
                f"Cannot connect to database server: {error_str}\n"
                f"Please check that the database is running and accessible."
            )
        if "password authentication failed" in error_str:
            return False, f"Database authentication failed: {error_str}"
        return False, f"Database connection error ({type(e).__name__}): {error_str}"


async def create_tables() -> None:
    """Create the documents table if it does not exist."""
    async with get_async_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")


async def drop_tables() -> None:
    """Drop every table owned by Courseware."""
    async with get_async_engine().begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info("Database tables dropped")

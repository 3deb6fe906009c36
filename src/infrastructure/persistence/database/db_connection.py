"""SQLAlchemy database configuration and connection management.

This module is responsible for:
- Engine creation and configuration
- Session management
- Transaction handling
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from sqlalchemy import event, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from src.config import get_logger, settings

# Create module logger
logger = get_logger(__name__)


def create_db_engine(connection_string: str | None = None) -> AsyncEngine:
    """Create async SQLAlchemy engine with SQLite-aware connection settings.

    Args:
        connection_string: Database URL (defaults to the configured URL)

    Returns:
        Configured async engine
    """
    db_url = connection_string or settings.database.url

    engine_kwargs: dict[str, Any] = {
        "echo": settings.database.echo,
    }

    if db_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {
            "check_same_thread": False,
            "timeout": 30.0,
        }
        if ":memory:" in db_url:
            # A single shared connection keeps the in-memory database alive
            engine_kwargs["poolclass"] = StaticPool
        else:
            database = make_url(db_url).database
            if database:
                Path(database).parent.mkdir(parents=True, exist_ok=True)
            engine_kwargs.update(
                pool_size=1,  # Smaller pool avoids concurrent writes to SQLite
                max_overflow=2,
                pool_pre_ping=True,
            )

    engine = create_async_engine(db_url, **engine_kwargs)

    if db_url.startswith("sqlite"):

        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, _):  # pragma: no cover
            """Set SQLite PRAGMAs on connection creation."""
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA busy_timeout = 30000")
            cursor.execute("PRAGMA foreign_keys = ON")
            cursor.close()

    logger.debug("Created database engine", url=db_url)
    return engine


# Global engine singleton
_engine: AsyncEngine | None = None


def get_engine() -> AsyncEngine:
    """Get or create the global database engine singleton.

    Returns:
        SQLAlchemy async engine instance
    """
    global _engine
    if _engine is None:
        _engine = create_db_engine()
    return _engine


def create_session_factory(
    engine: AsyncEngine | None = None,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory for the given engine.

    Args:
        engine: Optional engine (uses global engine if None)

    Returns:
        Async session factory for creating properly configured sessions
    """
    return async_sessionmaker(
        bind=engine or get_engine(),
        expire_on_commit=False,
        autoflush=True,
    )


# Global session factory singleton
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create the global session factory singleton.

    Returns:
        Async session factory
    """
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory()
    return _session_factory


@asynccontextmanager
async def get_session(
    rollback: bool = True,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncGenerator[AsyncSession]:
    """Get an asynchronous database session with automatic transaction management.

    The session commits when the context manager exits without an exception.

    Args:
        rollback: If True (default), automatically rolls back on exception.
        session_factory: Factory to use (uses the global factory if None)

    Yields:
        AsyncSession: Managed database session
    """
    session = (session_factory or get_session_factory())()
    try:
        yield session
        await session.commit()
    except Exception:
        if rollback:
            await session.rollback()
        raise
    finally:
        await session.close()

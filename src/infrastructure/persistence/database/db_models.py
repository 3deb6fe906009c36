"""SQLAlchemy database models for the Users API.

This module defines the persisted user table using SQLAlchemy 2.0 patterns
with proper type annotations.
"""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import DateTime, MetaData, String, Uuid, inspect
from sqlalchemy.ext.asyncio import AsyncAttrs, AsyncEngine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from src.config import get_logger

# Create module logger
logger = get_logger(__name__)

# Define naming convention for constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",  # Index
    "uq": "uq_%(table_name)s_%(column_0_label)s",  # Unique constraint
    "ck": "ck_%(table_name)s_%(constraint_name)s",  # Check constraint
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",  # Foreign key
    "pk": "pk_%(table_name)s",  # Primary key
}

# Create metadata with naming convention
metadata = MetaData(naming_convention=convention)


class UsersDBBase(AsyncAttrs, DeclarativeBase):
    """Base class for all database models."""

    metadata = metadata


class DBUser(UsersDBBase):
    """Persisted user record."""

    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Initialize database schema.

    Creates all tables if they don't exist.
    This is a safe operation that won't affect existing data.

    Args:
        engine: Engine to initialize (uses the global engine if None)
    """
    if engine is None:
        from src.infrastructure.persistence.database.db_connection import get_engine

        engine = get_engine()

    try:
        async with engine.connect() as conn:
            existing_tables = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).get_table_names()
            )
            if existing_tables:
                logger.info(f"Found existing tables: {existing_tables}")

        # SQLAlchemy skips tables that already exist
        async with engine.begin() as conn:
            await conn.run_sync(UsersDBBase.metadata.create_all)
            logger.info("Database schema verified - all tables exist")

    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

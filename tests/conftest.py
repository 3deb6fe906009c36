import pytest

from src.infrastructure.persistence.database.db_connection import (
    create_db_engine,
    create_session_factory,
)
from src.infrastructure.persistence.database.db_models import init_db

# Make shared model fixtures available to every test module
from tests.fixtures.models import db_user, elise_blin, robert_bowes, user, users

__all__ = ["db_user", "elise_blin", "robert_bowes", "user", "users"]

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def db_engine():
    """In-memory database engine with the schema created."""
    engine = create_db_engine(TEST_DATABASE_URL)
    try:
        await init_db(engine)
    except Exception as e:
        pytest.fail(f"Database initialization failed: {e}")
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    """Session factory bound to the test engine."""
    return create_session_factory(db_engine)


@pytest.fixture
async def db_session(session_factory):
    """Provide database session that is discarded after the test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def user_repo_fixture(db_session):
    """Provide a user repository."""
    from src.infrastructure.persistence.repositories import UserRepository

    return UserRepository(db_session)

"""Repository for user persistence."""

from uuid import UUID

from attrs import define
from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import get_logger
from src.domain.entities import User
from src.infrastructure.persistence.database.db_models import DBUser
from src.infrastructure.persistence.repositories.repo_decorator import db_operation

logger = get_logger(__name__)


@define(frozen=True, slots=True)
class UserMapper:
    """Maps between DBUser and User domain models."""

    @staticmethod
    def to_domain(db_model: DBUser) -> User:
        """Convert database user to domain model."""
        return User(id=db_model.id, full_name=db_model.full_name)

    @staticmethod
    def to_db(domain_model: User) -> DBUser:
        """Convert domain user to database model."""
        return DBUser(id=domain_model.id, full_name=domain_model.full_name)


class UserRepository:
    """SQLAlchemy implementation of the user repository.

    Works inside the caller's session; committing is left to whoever owns
    the session (see ``get_session``).
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with session and mapper."""
        self.session = session
        self.mapper = UserMapper()

    @db_operation("get_all_users")
    async def get_all(self) -> list[User]:
        """Get every stored user."""
        result = await self.session.execute(select(DBUser))
        return [self.mapper.to_domain(db_user) for db_user in result.scalars().all()]

    @db_operation("get_user_by_id")
    async def get_by_id(self, user_id: UUID) -> User | None:
        """Get user by ID, or None when it does not exist."""
        result = await self.session.execute(select(DBUser).where(DBUser.id == user_id))
        db_user = result.scalar_one_or_none()
        return self.mapper.to_domain(db_user) if db_user else None

    @db_operation("create_user")
    async def create(self, user: User) -> bool:
        """Insert a new user.

        Raises:
            IntegrityError: A user with the same ID already exists
        """
        result = await self.session.execute(
            insert(DBUser.__table__).values(id=user.id, full_name=user.full_name)
        )
        return result.rowcount > 0

    @db_operation("delete_user_by_id")
    async def delete_by_id(self, user_id: UUID) -> bool:
        """Delete user by ID, returning whether a row was removed."""
        result = await self.session.execute(delete(DBUser).where(DBUser.id == user_id))
        deleted = result.rowcount > 0
        if not deleted:
            logger.debug(f"No user to delete with id {user_id}")
        return deleted

"""Instrumented user service.

Wraps every user repository operation with the same three phases:
announce the operation, delegate to the repository while timing the call,
then either log completion with the elapsed time or log the failure and
re-raise the original error.
"""

from uuid import UUID

from src.application.services.protocols import LoggerAdapterProtocol
from src.application.utilities.stopwatch import Stopwatch
from src.domain.entities import User
from src.domain.repositories import UserRepositoryProtocol


class UserService:
    """Service exposing user CRUD operations with logging and timing.

    The service holds no mutable state, so a single instance can serve
    concurrent callers. Repository results are returned unchanged and
    repository errors propagate unchanged after being logged once.
    """

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        logger: LoggerAdapterProtocol,
    ) -> None:
        self._user_repository = user_repository
        self._logger = logger

    async def get_all(self) -> list[User]:
        """Get all users."""
        self._logger.log_information("Retrieving all users")
        stopwatch = Stopwatch.start_new()
        try:
            users = await self._user_repository.get_all()
        except Exception as e:
            self._logger.log_error(e, "Something went wrong while retrieving all users")
            raise
        self._logger.log_information(
            "All users retrieved in {0}ms", stopwatch.elapsed_ms
        )
        return users

    async def get_by_id(self, user_id: UUID) -> User | None:
        """Get user by ID.

        Returns:
            The user, or None when the repository has no user with that ID
        """
        self._logger.log_information("Retrieving user with id: {0}", user_id)
        stopwatch = Stopwatch.start_new()
        try:
            user = await self._user_repository.get_by_id(user_id)
        except Exception as e:
            self._logger.log_error(
                e, "Something went wrong while retrieving user with id {0}", user_id
            )
            raise
        self._logger.log_information(
            "User with id {0} retrieved in {1}ms", user_id, stopwatch.elapsed_ms
        )
        return user

    async def create(self, user: User) -> bool:
        """Create a user, returning the repository's success flag."""
        self._logger.log_information(
            "Creating user with id {0} and name: {1}", user.id, user.full_name
        )
        stopwatch = Stopwatch.start_new()
        try:
            created = await self._user_repository.create(user)
        except Exception as e:
            self._logger.log_error(e, "Something went wrong while creating a user")
            raise
        self._logger.log_information(
            "User with id {0} created in {1}ms", user.id, stopwatch.elapsed_ms
        )
        return created

    async def delete_by_id(self, user_id: UUID) -> bool:
        """Delete user by ID.

        Returns:
            True if the repository removed a user, False if none existed
        """
        self._logger.log_information("Deleting user with id: {0}", user_id)
        stopwatch = Stopwatch.start_new()
        try:
            deleted = await self._user_repository.delete_by_id(user_id)
        except Exception as e:
            self._logger.log_error(
                e, "Something went wrong while deleting user with id {0}", user_id
            )
            raise
        self._logger.log_information(
            "User with id {0} deleted in {1}ms", user_id, stopwatch.elapsed_ms
        )
        return deleted

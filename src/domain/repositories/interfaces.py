"""Domain repository interfaces following Clean Architecture principles.

These interfaces define the contracts for data access without depending on
infrastructure implementations, following the dependency inversion principle.
Repository interfaces belong in the domain layer according to Clean Architecture.
"""

from collections.abc import Awaitable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from uuid import UUID

    from src.domain.entities import User


class UserRepositoryProtocol(Protocol):
    """Repository interface for user persistence operations.

    Implementations may raise storage-layer errors from any method; callers
    receive them unchanged.
    """

    def get_all(self) -> Awaitable[list["User"]]:
        """Get every stored user."""
        ...

    def get_by_id(self, user_id: "UUID") -> Awaitable["User | None"]:
        """Get user by ID.

        Returns:
            The matching user, or None when no user has that ID
        """
        ...

    def create(self, user: "User") -> Awaitable[bool]:
        """Persist a new user.

        Returns:
            True if the user was written
        """
        ...

    def delete_by_id(self, user_id: "UUID") -> Awaitable[bool]:
        """Delete user by ID.

        Returns:
            True if a user was removed, False if none existed
        """
        ...

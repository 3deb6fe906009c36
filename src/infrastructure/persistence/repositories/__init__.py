"""Repository layer for database operations with SQLAlchemy 2.0."""

from src.infrastructure.persistence.repositories.factories import (
    get_user_repository,
    get_user_service,
)
from src.infrastructure.persistence.repositories.repo_decorator import db_operation
from src.infrastructure.persistence.repositories.user import UserMapper, UserRepository

__all__ = [
    "UserMapper",
    "UserRepository",
    "db_operation",
    "get_user_repository",
    "get_user_service",
]

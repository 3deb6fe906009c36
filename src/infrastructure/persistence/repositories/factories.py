"""Repository and service factory functions for Clean Architecture compliance.

These factory functions handle session-aware construction while keeping
session management concerns in the infrastructure layer. Application
services depend only on domain protocols, not these factory functions.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.application.services import UserService
from src.config import LoguruLoggerAdapter
from src.domain.repositories.interfaces import UserRepositoryProtocol
from src.infrastructure.persistence.repositories.user import UserRepository


def get_user_repository(session: AsyncSession) -> UserRepositoryProtocol:
    """Get user repository with session management."""
    return UserRepository(session)


def get_user_service(session: AsyncSession) -> UserService:
    """Get user service backed by the database and Loguru."""
    return UserService(
        get_user_repository(session),
        LoguruLoggerAdapter("src.application.services.user_service"),
    )

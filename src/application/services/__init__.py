"""Application services - orchestrators composing logging and timing around repositories."""

from .protocols import LoggerAdapterProtocol
from .user_service import UserService

__all__ = [
    "LoggerAdapterProtocol",
    "UserService",
]

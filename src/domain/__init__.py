"""Users domain layer - pure business types with zero infrastructure dependencies."""

from . import entities, repositories
from .entities import User

__all__ = [
    # Modules
    "entities",
    "repositories",
    # Key domain types
    "User",
]

"""Configuration module for the Users API service layer.

This module provides a type-safe configuration system using Pydantic Settings
together with the Loguru logging setup.

Public API:
----------
settings: Settings instance
    Pydantic settings object with nested configuration

get_config(key: str, default=None) -> Any
    Backward-compatible configuration access function

get_logger(name: str) -> Logger
    Get a context-aware logger for your module

setup_loguru_logger(verbose: bool = False) -> None
    Configure Loguru logger for the application

LoguruLoggerAdapter(name: str)
    Logger adapter used by application services

Usage:
------
```python
from src.config import settings
db_url = settings.database.url

from src.config import get_config
db_url = get_config("DATABASE_URL")

from src.config import get_logger
logger = get_logger(__name__)
logger.info("Starting operation")
```
"""

from .logging import LoguruLoggerAdapter, get_logger, setup_loguru_logger
from .settings import get_config, settings

__all__ = [
    "LoguruLoggerAdapter",
    # Backward compatibility
    "get_config",
    # Logging
    "get_logger",
    # Modern settings
    "settings",
    "setup_loguru_logger",
]

"""Logging configuration and utilities using Loguru.

This module provides centralized logging setup for the Users API service
layer, including structured logging with Loguru and the production logger
adapter handed to application services.

Key Components:
--------------
- Structured logging with Loguru
- Logger adapter preserving message templates and arguments
- Per-module bound loggers for infrastructure code

Public API:
----------
setup_loguru_logger(verbose: bool = False) -> None
    Configure Loguru logger for the application

get_logger(name: str) -> Logger
    Get a context-aware logger for your module
    Args: name - Usually __name__ from the calling module
    Usage: logger = get_logger(__name__)

LoguruLoggerAdapter(name: str)
    Template-based logger adapter for application services
    Usage: UserService(repository, LoguruLoggerAdapter(__name__))

Quick Start:
-----------
1. Get a logger for your module:
    ```python
    from src.config import get_logger
    logger = get_logger(__name__)
    ```

2. Log with structured context:
    ```python
    logger.info("Creating engine", url=db_url)
    ```

3. Hand an adapter to a service:
    ```python
    service = UserService(repository, LoguruLoggerAdapter("user_service"))
    ```
"""

from pathlib import Path
import sys
from typing import Any

from loguru import logger

from .settings import settings

SERVICE_NAME = "users-api"

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================


def setup_loguru_logger(verbose: bool = False) -> None:
    """Configure Loguru logger for the application.

    Args:
        verbose: Enable verbose logging with debug level and detailed tracebacks

    Note:
        - Removes default logger and sets up console and file handlers
        - Console format is colorized and simplified
        - File format is serialized JSON including bound template fields
        - Log rotation and retention are automatically managed
    """
    logger.remove()

    log_file_path = Path(settings.logging.log_file)
    log_file_path.parent.mkdir(parents=True, exist_ok=True)

    # Add contextual info to all log records
    logger.configure(extra={"service": SERVICE_NAME, "module": "root"})

    # -------------------------------------------------------------------------
    # Console Handler
    # -------------------------------------------------------------------------
    console_level = "DEBUG" if verbose else settings.logging.console_level
    logger.add(
        sink=sys.stdout,
        level=console_level,
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:"
            "<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=verbose,
        diagnose=verbose,
    )

    # -------------------------------------------------------------------------
    # File Handler
    # -------------------------------------------------------------------------
    enqueue_logs = not settings.logging.real_time_debug
    logger.add(
        sink=str(log_file_path),
        level=settings.logging.file_level,
        rotation="10 MB",
        retention="1 week",
        compression="zip",
        backtrace=True,
        diagnose=False,
        enqueue=enqueue_logs,
        catch=True,
        serialize=True,  # JSON records keep extra["template"] and extra["template_args"]
    )


# =============================================================================
# LOGGER FACTORY
# =============================================================================


def get_logger(name: str) -> Any:  # Use Any for Loguru logger type
    """Get a pre-configured logger instance for the given module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Pre-configured Loguru logger instance with module context
    """
    return logger.bind(
        module=name,
        service=SERVICE_NAME,
    )


# =============================================================================
# SERVICE LOGGER ADAPTER
# =============================================================================


class LoguruLoggerAdapter:
    """Loguru-backed implementation of the application logger adapter.

    Messages are written with ``str.format`` style positional templates
    (``"User with id {0} retrieved in {1}ms"``). Loguru renders the message,
    while the raw template and its arguments are bound as separate fields so
    serialized sinks can index them without parsing the rendered text.
    """

    def __init__(self, name: str) -> None:
        self._logger = get_logger(name)

    def log_information(self, template: str, *args: Any) -> None:
        """Emit an INFO record for the template and its arguments."""
        self._bound(template, args).opt(depth=1).info(template, *args)

    def log_error(self, error: BaseException, template: str, *args: Any) -> None:
        """Emit an ERROR record with the error attached as exception context."""
        self._bound(template, args).opt(depth=1, exception=error).error(
            template, *args
        )

    def _bound(self, template: str, args: tuple[Any, ...]) -> Any:
        return self._logger.bind(template=template, template_args=args)

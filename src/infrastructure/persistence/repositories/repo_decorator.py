"""Repository decorator for standardizing DB operations.

This module provides decorators for repository methods that handle common
database operations including:
- Structured logging with context and timing information
- Error classification in logs, with the original error always re-raised

The decorators help enforce a consistent pattern for all database operations
while reducing repetitive error-handling code.
"""

from collections.abc import Callable, Coroutine
import functools
import inspect
import time
from typing import Any, ParamSpec, TypeVar
from uuid import UUID

from sqlalchemy.exc import (
    IntegrityError,
    OperationalError,
    SQLAlchemyError,
)

from src.config import get_logger

# Type variables for generic function signatures
P = ParamSpec("P")
T = TypeVar("T")

logger = get_logger(__name__)


def db_operation(operation_name: str | None = None):
    """Decorate repository methods with consistent logging and error handling.

    Args:
        operation_name: Optional name for the operation (defaults to function name)

    Returns:
        A decorator function that wraps async repository methods

    Example:
        @db_operation("get_user")
        async def get_by_id(self, user_id: UUID) -> User | None:
            ...
    """

    def decorator(
        func: Callable[P, Coroutine[Any, Any, T]],
    ) -> Callable[P, Coroutine[Any, Any, T]]:
        func_name = operation_name or func.__name__

        if not inspect.iscoroutinefunction(func):
            raise TypeError(
                f"db_operation can only be used with async functions, but {func_name} is not async",
            )

        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            start_time = time.perf_counter()

            # Extract repository name from first argument (self)
            repo_name = args[0].__class__.__name__ if args else "Repository"
            context = _build_log_context(args[1:], kwargs)

            try:
                logger.trace(
                    f"DB operation starting: {repo_name}.{func_name}",
                    operation=func_name,
                    **context,
                )

                result = await func(*args, **kwargs)

                exec_time = (time.perf_counter() - start_time) * 1000
                logger.trace(
                    f"DB operation completed: {repo_name}.{func_name}",
                    operation=func_name,
                    exec_time_ms=exec_time,
                    **context,
                )

                return result

            except SQLAlchemyError as e:
                level, label = _classify_db_error(e)
                logger.log(
                    level,
                    f"{label}: {repo_name}.{func_name}",
                    operation=func_name,
                    error=str(e),
                    exec_time_ms=(time.perf_counter() - start_time) * 1000,
                    **context,
                )
                raise

        return wrapper

    return decorator


def _classify_db_error(error: SQLAlchemyError) -> tuple[str, str]:
    """Pick the log level and label for a database error.

    Constraint violations are expected outcomes of caller input (e.g. a
    duplicate primary key) and log as warnings; everything else is an error.
    """
    if isinstance(error, IntegrityError):
        return "WARNING", "DB integrity error"
    if isinstance(error, OperationalError):
        return "ERROR", "DB operational error"
    return "ERROR", "SQLAlchemy error"


def _build_log_context(
    args: tuple[Any, ...], kwargs: dict[str, Any]
) -> dict[str, Any]:
    """Build a context dictionary for logging from function arguments.

    Args:
        args: Positional arguments after ``self``
        kwargs: Function keyword arguments

    Returns:
        A dictionary with loggable values extracted from the arguments
    """
    # Identifiers passed positionally, e.g. get_by_id(user_id)
    positional_ids = {
        f"arg_{index}": str(value)
        for index, value in enumerate(args)
        if isinstance(value, UUID | int | str)
    }

    id_params = {
        k: str(v)
        for k, v in kwargs.items()
        if k.endswith("_id") and isinstance(v, UUID | int | str)
    }

    simple_params = {
        k: v
        for k, v in kwargs.items()
        if (
            not k.startswith("_")
            and not isinstance(v, dict | list | set)
            and k not in id_params
        )
    }

    # IDs take precedence
    return {**positional_ids, **simple_params, **id_params}

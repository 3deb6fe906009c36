"""Protocol definitions for application service dependency injection.

These protocols define contracts for cross-cutting collaborators needed by
services, enabling Clean Architecture compliance through dependency inversion.
"""

from typing import Any, Protocol


class LoggerAdapterProtocol(Protocol):
    """Protocol for template-based structured logging.

    Templates use positional ``{0}``-style placeholders. Arguments are passed
    separately so backends can index the template and its values as
    independent fields.
    """

    def log_information(self, template: str, *args: Any) -> None:
        """Log an information-level message."""
        ...

    def log_error(self, error: BaseException, template: str, *args: Any) -> None:
        """Log an error-level message with the error attached."""
        ...

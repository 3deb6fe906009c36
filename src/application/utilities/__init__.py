"""Application utilities - shared utilities for application services."""

from .stopwatch import Stopwatch

__all__ = [
    "Stopwatch",
]

"""Elapsed-time measurement for instrumented operations."""

import time

from attrs import define, field


@define(slots=True)
class Stopwatch:
    """Scoped stopwatch capturing a start timestamp.

    Uses the monotonic performance counter in integer nanoseconds, so
    elapsed values are never negative and never lose a millisecond to
    float rounding.

    Example:
        >>> stopwatch = Stopwatch.start_new()
        >>> result = await repository.get_all()
        >>> stopwatch.elapsed_ms
        3
    """

    _started_at: int = field(factory=time.perf_counter_ns)

    @classmethod
    def start_new(cls) -> "Stopwatch":
        """Create a stopwatch started at the current instant."""
        return cls()

    @property
    def elapsed_ms(self) -> int:
        """Whole milliseconds elapsed since the stopwatch was started."""
        return (time.perf_counter_ns() - self._started_at) // 1_000_000

"""Add-only line total shared by all counting tasks of one scan."""

from threading import Lock


class LineAccumulator:
    """Thread-safe running total.

    Counting tasks only add; the driver reads ``value`` once the pool is
    quiescent. Reads before then are allowed but may be partial.
    """

    def __init__(self) -> None:
        self._total = 0
        self._lock = Lock()

    def add(self, lines: int) -> int:
        """Add ``lines`` to the total and return the new total."""
        if lines < 0:
            raise ValueError(f"line count must be non-negative, got {lines}")
        with self._lock:
            self._total += lines
            return self._total

    @property
    def value(self) -> int:
        with self._lock:
            return self._total

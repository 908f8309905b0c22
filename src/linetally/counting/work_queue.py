"""Lock-guarded FIFO of file paths waiting to be counted."""

from collections import deque
from pathlib import Path
from threading import Lock
from typing import Deque, Optional


class WorkQueue:
    """Single-producer, multi-consumer queue with non-blocking pop.

    Push and pop take the same lock, so an entry is fully enqueued before any
    consumer can see it and every entry is handed out exactly once.
    """

    def __init__(self) -> None:
        self._items: Deque[Path] = deque()
        self._lock = Lock()

    def push(self, path: Path) -> None:
        with self._lock:
            self._items.append(path)

    def pop(self) -> Optional[Path]:
        """Remove and return the oldest entry, or None if the queue is empty."""
        with self._lock:
            if not self._items:
                return None
            return self._items.popleft()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __bool__(self) -> bool:
        return len(self) > 0

"""Worker pool manager: bounded counting tasks fed from the work queue.

The pool owns one tracking set holding every in-flight future, the
discovery task included. Quiescence is "nothing tracked and nothing queued";
since discovery stays tracked until it is reaped, a momentarily empty queue
is never mistaken for the end of the scan.

``advance()`` is meant to be driven from a single thread. The tracking set
is not locked.
"""

from __future__ import annotations

from concurrent.futures import FIRST_COMPLETED, Executor, Future, wait
from pathlib import Path
from typing import Optional

from ..logging_config import get_logger
from .accumulator import LineAccumulator
from .counter import DEFAULT_CHUNK_SIZE, count_file
from .discovery import discover_files
from .models import DiscoveryStats, FileCount
from .work_queue import WorkQueue

logger = get_logger(__name__)


class WorkerPool:
    """Tops up counting tasks to a cap and reaps the finished ones.

    Attributes:
        files_counted: Counting tasks that completed (readable or not)
        files_unreadable: Completed tasks that hit a read error
        files_failed: Tasks whose future raised; they add nothing
        discovery: Stats returned by the discovery task once reaped
    """

    def __init__(
        self,
        root: Path,
        queue: WorkQueue,
        accumulator: LineAccumulator,
        executor: Executor,
        max_tasks: int,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if max_tasks < 1:
            raise ValueError("max_tasks must be at least 1")
        self.root = Path(root)
        self._queue = queue
        self._accumulator = accumulator
        self._executor = executor
        self._max_tasks = max_tasks
        self._chunk_size = chunk_size
        self._tasks: dict[Future, Optional[Path]] = {}
        self._discovery: Optional[Future] = None

        self.files_counted = 0
        self.files_unreadable = 0
        self.files_failed = 0
        self.discovery: Optional[DiscoveryStats] = None

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    @property
    def started(self) -> bool:
        return self._discovery is not None

    def start(self) -> None:
        """Launch the discovery task. It holds one slot until reaped."""
        if self._discovery is not None:
            raise RuntimeError("discovery already started")
        self._discovery = self._executor.submit(discover_files, self.root, self._queue)
        self._tasks[self._discovery] = None

    def advance(self, timeout: float = 0.0) -> bool:
        """Run one top-up / reap round.

        Args:
            timeout: Seconds to wait for at least one tracked task to finish
                before reaping. 0 polls without blocking.

        Returns:
            True once discovery and every counting task have been reaped and
            the queue is empty.
        """
        if self._discovery is None:
            raise RuntimeError("advance() called before start()")

        self._top_up()

        if self._tasks and timeout > 0:
            wait(list(self._tasks), timeout=timeout, return_when=FIRST_COMPLETED)

        for future in [f for f in self._tasks if f.done()]:
            path = self._tasks.pop(future)
            self._reap(future, path)

        return not self._tasks and not self._queue

    def _top_up(self) -> None:
        while len(self._tasks) < self._max_tasks:
            path = self._queue.pop()
            if path is None:
                break
            future = self._executor.submit(count_file, path, self._accumulator, self._chunk_size)
            self._tasks[future] = path

    def _reap(self, future: Future, path: Optional[Path]) -> None:
        try:
            result = future.result()
        except Exception:
            if path is None:
                logger.exception(f"Discovery under {self.root} failed")
                self.discovery = DiscoveryStats()
            else:
                self.files_failed += 1
                logger.exception(f"Counting {path} failed")
            return

        if path is None:
            self.discovery = result
            return

        self.files_counted += 1
        if isinstance(result, FileCount) and not result.readable:
            self.files_unreadable += 1

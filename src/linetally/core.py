"""Completion driver: runs the worker pool until the scan is quiescent."""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Optional

from .config import CountConfig
from .counting import LineAccumulator, ScanResult, WorkerPool, WorkQueue
from .exceptions import InvalidPathError
from .logging_config import get_logger

logger = get_logger(__name__)

ProgressCallback = Callable[[int], None]


class LineCounter:
    """Counts every line under one directory tree.

    Each ``run()`` builds a fresh queue, accumulator and executor, so a
    counter can be run repeatedly and totals never leak between scans.

    Example:
        >>> result = LineCounter("/path/to/tree").run()
        >>> result.total_lines
        1234
    """

    def __init__(self, root, config: Optional[CountConfig] = None):
        self.root = Path(root)
        self.config = config or CountConfig()
        if not self.root.exists():
            raise InvalidPathError(self.root, "does not exist")
        if not self.root.is_dir():
            raise InvalidPathError(self.root, "is not a directory")

    def run(self, on_progress: Optional[ProgressCallback] = None) -> ScanResult:
        """Block until every discovered file has been counted.

        Args:
            on_progress: Called after each pool round with the number of
                files counted so far

        Returns:
            ScanResult with the aggregate total and per-scan statistics
        """
        cap = self.config.concurrency_cap
        queue = WorkQueue()
        accumulator = LineAccumulator()
        started = time.perf_counter()

        logger.info(f"Counting lines under {self.root} with {cap} concurrent tasks")

        with ThreadPoolExecutor(max_workers=cap, thread_name_prefix="linetally") as executor:
            pool = WorkerPool(
                self.root,
                queue,
                accumulator,
                executor,
                max_tasks=cap,
                chunk_size=self.config.chunk_size,
            )
            pool.start()
            while not pool.advance(timeout=self.config.poll_interval_seconds):
                if on_progress is not None:
                    on_progress(pool.files_counted)

        if on_progress is not None:
            on_progress(pool.files_counted)

        discovery = pool.discovery
        result = ScanResult(
            root=self.root,
            total_lines=accumulator.value,
            files_counted=pool.files_counted,
            files_unreadable=pool.files_unreadable,
            files_failed=pool.files_failed,
            unsupported_entries=discovery.unsupported_entries if discovery else 0,
            unreadable_directories=discovery.unreadable_directories if discovery else 0,
            elapsed_seconds=time.perf_counter() - started,
            workers=cap,
        )
        logger.info(
            f"Counted {result.total_lines} lines in {result.files_counted} files "
            f"({result.elapsed_seconds:.2f}s)"
        )
        return result

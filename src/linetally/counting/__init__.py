"""Concurrent line counting: discovery, work queue, worker pool."""

from .accumulator import LineAccumulator
from .counter import count_file, count_lines
from .discovery import discover_files
from .models import DiscoveryStats, FileCount, ScanResult
from .pool import WorkerPool
from .work_queue import WorkQueue

__all__ = [
    "LineAccumulator",
    "WorkQueue",
    "WorkerPool",
    "count_lines",
    "count_file",
    "discover_files",
    "FileCount",
    "DiscoveryStats",
    "ScanResult",
]

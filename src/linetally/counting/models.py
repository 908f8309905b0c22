"""Data models for a line-count scan."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class FileCount:
    """Outcome of counting one file.

    ``error`` is set when the file could not be fully read; ``lines`` then
    holds the degenerate count (newlines seen before the failure, plus one).
    """

    path: Path
    lines: int
    error: Optional[str] = None

    @property
    def readable(self) -> bool:
        return self.error is None


@dataclass
class DiscoveryStats:
    """What the discovery walk saw."""

    files_enqueued: int = 0
    unsupported_entries: int = 0
    unreadable_directories: int = 0


@dataclass
class ScanResult:
    """Final report of a scan."""

    root: Path
    total_lines: int
    files_counted: int = 0
    files_unreadable: int = 0
    files_failed: int = 0
    unsupported_entries: int = 0
    unreadable_directories: int = 0
    elapsed_seconds: float = 0.0
    workers: int = 1

    def to_dict(self) -> dict:
        data = asdict(self)
        data["root"] = str(self.root)
        data["elapsed_seconds"] = round(self.elapsed_seconds, 4)
        return data

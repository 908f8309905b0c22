"""Counting exceptions: per-file read failures."""

from pathlib import Path

from .base import LineTallyError


class CountingError(LineTallyError):
    """Base class for errors raised while counting lines."""
    pass


class FileAccessError(CountingError):
    """Raised when a file cannot be opened or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason

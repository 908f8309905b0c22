"""Exception hierarchy for linetally."""

from .base import LineTallyError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)
from .counting import CountingError, FileAccessError

__all__ = [
    "LineTallyError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
    "CountingError",
    "FileAccessError",
]

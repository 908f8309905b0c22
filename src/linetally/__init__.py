"""
linetally - concurrent recursive line counter.

Walks a directory tree in a background task while a bounded pool of worker
threads counts newline bytes in every regular file, and reports the total.
"""

__version__ = "0.1.0"
__author__ = "linetally contributors"

from .api import count_lines_in_tree
from .config import CountConfig, load_config
from .core import LineCounter
from .counting import ScanResult

__all__ = [
    "count_lines_in_tree",  # Main entry point
    "LineCounter",
    "CountConfig",
    "load_config",
    "ScanResult",
]

"""Public API for linetally.

Example:
    >>> from linetally import count_lines_in_tree
    >>> result = count_lines_in_tree("/path/to/tree", workers=4)
    >>> result.total_lines
    1234
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .config import load_config
from .core import LineCounter, ProgressCallback
from .counting import ScanResult
from .logging_config import get_logger

logger = get_logger(__name__)


def count_lines_in_tree(
    path: str | Path = ".",
    config_file: Optional[Path] = None,
    on_progress: Optional[ProgressCallback] = None,
    **overrides,
) -> ScanResult:
    """Count the lines of every regular file under ``path``.

    Args:
        path: Root directory (default: current directory)
        config_file: Optional explicit config file path
        on_progress: Optional callback receiving the files counted so far
        **overrides: Configuration overrides (e.g. workers=4)

    Returns:
        ScanResult whose ``total_lines`` is the sum of newlines + 1 per file

    Raises:
        InvalidPathError: If path is not an existing directory
        ConfigurationError: If configuration is invalid
    """
    config = load_config(config_file=config_file, **overrides)
    logger.debug(f"Configuration loaded: {config}")
    return LineCounter(path, config).run(on_progress=on_progress)

"""Line counter unit: newline bytes in one file, plus one.

The trailing "+1" accounts for a last line without a newline. It also means
an empty file and a file holding one unterminated line both count as 1, and
a file ending in a newline counts one more than its visible lines. The
convention is kept deliberately; totals are sums of these per-file values.
"""

from __future__ import annotations

from pathlib import Path

from ..exceptions import FileAccessError
from ..logging_config import get_logger
from .accumulator import LineAccumulator
from .models import FileCount

logger = get_logger(__name__)

NEWLINE = b"\n"
DEFAULT_CHUNK_SIZE = 1024 * 1024


def _count_newlines(path: Path, chunk_size: int) -> tuple[int, str | None]:
    newlines = 0
    try:
        with open(path, "rb") as f:
            while True:
                chunk = f.read(chunk_size)
                if not chunk:
                    break
                newlines += chunk.count(NEWLINE)
    except OSError as e:
        return newlines, str(e)
    return newlines, None


def _tally(path: Path, chunk_size: int, strict: bool = False) -> tuple[int, str | None]:
    """Lines of ``path`` and the read error, if any. Warns unless ``strict`` raises."""
    newlines, error = _count_newlines(path, chunk_size)
    if error is not None:
        if strict:
            raise FileAccessError(path, error)
        logger.warning(f"Cannot read {path}: {error}")
    return newlines + 1, error


def count_lines(path: Path, chunk_size: int = DEFAULT_CHUNK_SIZE, strict: bool = False) -> int:
    """Count the lines of ``path`` as newline bytes + 1.

    Args:
        path: File to read in binary mode
        chunk_size: Bytes per read
        strict: Raise instead of returning the degenerate count on failure

    Returns:
        Line count. An unreadable file yields the newlines read before the
        failure plus one (1 if it could not be opened).

    Raises:
        FileAccessError: Only when ``strict`` is set and the read fails
    """
    lines, _ = _tally(path, chunk_size, strict)
    return lines


def count_file(
    path: Path, accumulator: LineAccumulator, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> FileCount:
    """Count one file and add its lines to ``accumulator``.

    This is the body of a counting task.
    """
    lines, error = _tally(path, chunk_size)
    accumulator.add(lines)
    logger.debug(f"{path}: {lines} lines")
    return FileCount(path=path, lines=lines, error=error)

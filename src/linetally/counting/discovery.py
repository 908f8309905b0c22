"""Discovery task: walk a directory tree and enqueue regular files."""

import os
from pathlib import Path

from ..logging_config import get_logger
from .models import DiscoveryStats
from .work_queue import WorkQueue

logger = get_logger(__name__)


def discover_files(root: Path, queue: WorkQueue) -> DiscoveryStats:
    """Push every regular file under ``root`` onto ``queue``.

    Directories are descended into, never enqueued. Symlinked directories are
    not followed, so each real directory is visited once. A symlink to a
    regular file is enqueued like the file itself. Anything else (pipes,
    sockets, devices, broken or looping links, entries whose type cannot be
    read) is reported and skipped. A subdirectory that cannot be listed is
    reported and skipped; the walk goes on.
    """
    stats = DiscoveryStats()
    pending = [Path(root)]

    while pending:
        directory = pending.pop()
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    try:
                        _classify(entry, queue, pending, stats)
                    except OSError as e:
                        # e.g. ELOOP from a symlink pointing at itself
                        stats.unsupported_entries += 1
                        logger.warning(f"Cannot classify {entry.path}: {e}; it will not be counted")
        except OSError as e:
            stats.unreadable_directories += 1
            logger.warning(f"Cannot list directory {directory}: {e}")

    logger.debug(
        f"Discovery finished under {root}: {stats.files_enqueued} files, "
        f"{stats.unsupported_entries} unsupported"
    )
    return stats


def _classify(
    entry: os.DirEntry, queue: WorkQueue, pending: list, stats: DiscoveryStats
) -> None:
    path = Path(entry.path)

    if entry.is_dir(follow_symlinks=False):
        pending.append(path)
    elif entry.is_dir():
        logger.debug(f"Not following symlinked directory {path}")
    elif entry.is_file():
        queue.push(path)
        stats.files_enqueued += 1
    else:
        stats.unsupported_entries += 1
        logger.warning(f"{path} is neither a file nor a directory; it will not be counted")

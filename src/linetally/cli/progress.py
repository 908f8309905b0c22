"""Progress display while a scan runs - wraps Rich or runs silently."""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

T = TypeVar("T")


class ScanProgress:
    """Spinner with a running count of files counted."""

    def __init__(self, console: Console):
        self.console = console

    def run(self, callback: Callable[[Optional[Callable[[int], None]]], T]) -> T:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        ) as progress:
            task_id = progress.add_task("Counting lines...", total=None)

            def on_progress(files_counted: int) -> None:
                progress.update(task_id, description=f"Counting lines... {files_counted} files")

            return callback(on_progress)


class SilentProgress:
    """No-op reporter for --quiet and --json."""

    def run(self, callback: Callable[[Optional[Callable[[int], None]]], T]) -> T:
        return callback(None)

"""The count command."""

import json
from pathlib import Path
from typing import Optional

import typer

from .. import __version__
from ..core import LineCounter
from ..exceptions import LineTallyError
from ..logging_config import setup_logging
from . import app
from ._common import console, err_console, resolve_config
from .progress import ScanProgress, SilentProgress


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold cyan]linetally[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)


@app.command()
def main(
    path: Path = typer.Argument(
        ...,
        help="Directory whose files are counted",
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Concurrent tasks, discovery included (default: CPU count - 1)",
        min=1,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every file and pool decision",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    log_file: Optional[str] = typer.Option(
        None,
        "--log-file",
        help="Also write logs to this file",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """
    Count the lines of every regular file under PATH.

    A line is a newline byte; each file adds one more for its last line, so
    an empty file counts as 1.

    [bold cyan]Examples:[/bold cyan]

      linetally src/

      linetally . --workers 4 --json
    """
    try:
        settings = resolve_config(
            config=config, workers=workers, verbose=verbose, quiet=quiet, log_file=log_file
        )
    except LineTallyError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    # Flags, env and config files all land in settings.verbosity
    logger = setup_logging(settings.verbosity, log_file=settings.log_file)

    try:
        counter = LineCounter(path, settings)
        if json_output or settings.verbosity == "quiet":
            reporter = SilentProgress()
        else:
            reporter = ScanProgress(err_console)
        result = reporter.run(lambda on_progress: counter.run(on_progress=on_progress))

    except LineTallyError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        err_console.print("\n[yellow]Count interrupted[/yellow]")
        raise typer.Exit(130)

    if json_output:
        print(json.dumps(result.to_dict(), indent=2))
        return

    print(f"TOTAL number of lines in files: {result.total_lines}")
    if settings.verbosity == "verbose":
        err_console.print(
            f"[dim]{result.files_counted} files, "
            f"{result.files_unreadable} unreadable, "
            f"{result.files_failed} failed, "
            f"{result.unsupported_entries} unsupported entries, "
            f"{result.elapsed_seconds:.2f}s[/dim]"
        )

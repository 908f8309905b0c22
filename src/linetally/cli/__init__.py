"""CLI entry point."""

import typer

app = typer.Typer(
    name="linetally",
    help="linetally - count the lines of every file under a directory",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import the command module to register it
from .count import main as _main  # noqa: F401, E402

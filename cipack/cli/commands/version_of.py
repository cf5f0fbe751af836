from __future__ import annotations

from pathlib import Path

import typer

from cipack.cli.commands._helpers import exit_on_pipeline_error
from cipack.output.console import RichConsole
from cipack.services.version import read_version


def version_of(
    binary: Path = typer.Argument(..., help="Executable supporting --version"),
) -> None:
    """Print the version a binary reports (second token of --version)."""
    console = RichConsole(stderr=True)
    version = exit_on_pipeline_error(read_version(binary.resolve()), console)
    typer.echo(version)

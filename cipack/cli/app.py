from __future__ import annotations

import typer

from cipack import __version__
from cipack.cli.commands.check import check
from cipack.cli.commands.deps import deps
from cipack.cli.commands.release import release
from cipack.cli.commands.version_of import version_of


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(check)
app.command()(release)
app.command()(deps)
app.command("version-of")(version_of)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_print_version,
        is_eager=True,
    ),
) -> None:
    """Build, lint, test and package cargo binaries in CI."""


def main() -> None:
    app()

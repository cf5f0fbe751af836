from __future__ import annotations

from pathlib import Path

import typer

from cipack.cli.commands._helpers import exit_on_pipeline_error
from cipack.cli.context import load_pipeline_config
from cipack.core.config import Overrides
from cipack.output.console import RichConsole
from cipack.services.deps import DependencyInstaller


def deps(
    dry_run: bool = typer.Option(False, "--dry-run", help="Print commands without running them"),
    config: Path | None = typer.Option(None, "--config", help="Path to cipack.toml"),
) -> None:
    """Install the OS packages needed to build (apk or apt-get)."""
    console = RichConsole()
    pipeline_config = load_pipeline_config(
        console=console, overrides=Overrides(), config_path=config
    )

    console.header("Dependencies")
    installer = DependencyInstaller(console=console)
    plan = exit_on_pipeline_error(
        installer.install(pipeline_config.deps, cwd=Path.cwd(), dry_run=dry_run),
        console,
    )
    if plan.packages:
        console.success(f"{plan.manager}: {' '.join(plan.packages)}")

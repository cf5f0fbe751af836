from __future__ import annotations

from pathlib import Path

import typer

from cipack.cli.commands._helpers import exit_on_pipeline_error
from cipack.cli.context import build_context
from cipack.core.config import Overrides
from cipack.output.console import Style
from cipack.services.pipeline import ReleasePipeline


def release(
    bin_name: str | None = typer.Option(
        None, "--bin", help="Binary to package (default: $BIN_NAME)"
    ),
    target: str | None = typer.Option(
        None, "--target", help="Target identifier for the archive name (default: $TARGET)"
    ),
    release_dir: Path | None = typer.Option(
        None, "--release-dir", help="Output directory (default: release)"
    ),
    manifest: bool = typer.Option(
        False, "--manifest", help="Also write manifest.json with size and sha256"
    ),
    skip_deps: bool = typer.Option(False, "--skip-deps", help="Do not install OS packages"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print commands without running them"),
    project_dir: Path | None = typer.Option(
        None, "--project-dir", help="Cargo project directory (default: .)"
    ),
    config: Path | None = typer.Option(None, "--config", help="Path to cipack.toml"),
) -> None:
    """Build a release binary and package it as <bin>-<version>-<target>.tar.gz."""
    ctx = build_context(
        overrides=Overrides(
            bin_name=bin_name,
            target=target,
            release_dir=release_dir,
            project_dir=project_dir,
            install_deps=False if skip_deps else None,
        ),
        config_path=config,
    )

    pipeline = ReleasePipeline(
        project=ctx.project,
        config=ctx.config,
        console=ctx.console,
        dry_run=dry_run,
    )
    artifacts = exit_on_pipeline_error(pipeline.run(manifest=manifest), ctx.console)

    if dry_run:
        ctx.console.success(f"would write {artifacts.archive} (dry-run)")
        return

    ctx.console.success(str(artifacts.archive))
    ctx.console.print(f"  {artifacts.version_file}: {artifacts.version}", Style.DIM)
    ctx.console.print(f"  {artifacts.archive_name_file}: {artifacts.archive.name}", Style.DIM)
    if artifacts.manifest is not None:
        ctx.console.print(f"  {artifacts.manifest}", Style.DIM)

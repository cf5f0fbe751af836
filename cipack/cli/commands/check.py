from __future__ import annotations

from pathlib import Path

import typer

from cipack.cli.commands._helpers import exit_on_pipeline_error
from cipack.cli.context import build_context
from cipack.core.config import Overrides
from cipack.services.pipeline import CheckPipeline


def check(
    lint: bool | None = typer.Option(
        None,
        "--lint/--no-lint",
        help="Run cargo fmt --check and clippy -Dwarnings (default: LINT=1)",
    ),
    build_flags: str | None = typer.Option(
        None, "--build-flags", help="Extra cargo build flags (default: $EXTRA_CARGO_BUILD_FLAGS)"
    ),
    test_flags: str | None = typer.Option(
        None, "--test-flags", help="Extra cargo test flags (default: $EXTRA_CARGO_TEST_FLAGS)"
    ),
    skip_deps: bool = typer.Option(False, "--skip-deps", help="Do not install OS packages"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print commands without running them"),
    project_dir: Path | None = typer.Option(
        None, "--project-dir", help="Cargo project directory (default: .)"
    ),
    config: Path | None = typer.Option(None, "--config", help="Path to cipack.toml"),
) -> None:
    """Lint (optional), build and test the project."""
    ctx = build_context(
        overrides=Overrides(
            lint=lint,
            build_flags=build_flags,
            test_flags=test_flags,
            project_dir=project_dir,
            install_deps=False if skip_deps else None,
        ),
        config_path=config,
    )

    pipeline = CheckPipeline(
        project=ctx.project,
        config=ctx.config,
        console=ctx.console,
        dry_run=dry_run,
    )
    exit_on_pipeline_error(pipeline.run(), ctx.console)

    steps = "lint, build and test" if ctx.config.lint else "build and test"
    if dry_run:
        ctx.console.success(f"{steps} (dry-run)")
    else:
        ctx.console.success(f"{steps} passed")

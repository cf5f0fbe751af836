from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

import typer

from cipack.core.config import (
    Overrides,
    PipelineConfig,
    load_config,
    load_config_or_default,
    resolve_pipeline_config,
)
from cipack.core.errors import ErrorCode
from cipack.core.result import Err
from cipack.core.workspace import Project, default_config_path, resolve_project
from cipack.output.console import ConsoleProtocol, RichConsole, Style


@dataclass(frozen=True, slots=True)
class CLIContext:
    project: Project
    config: PipelineConfig
    console: ConsoleProtocol


def _fail(console: ConsoleProtocol, message: str, hint: str | None, code: ErrorCode) -> NoReturn:
    console.error(message)
    if hint:
        console.print(f"hint: {hint}", Style.DIM)
    raise typer.Exit(code=int(code))


def load_pipeline_config(
    *,
    console: ConsoleProtocol,
    overrides: Overrides,
    config_path: Path | None = None,
    root: Path | None = None,
) -> PipelineConfig:
    """Load cipack.toml (explicit path must exist), merge env and overrides."""
    root = root or Path.cwd()
    if config_path is not None:
        file_result = load_config(config_path)
    else:
        file_result = load_config_or_default(default_config_path(root))
    if isinstance(file_result, Err):
        _fail(console, file_result.error.message, file_result.error.hint, ErrorCode.USER_ERROR)

    resolved = resolve_pipeline_config(file_result.value, os.environ, overrides)
    if isinstance(resolved, Err):
        _fail(console, resolved.error.message, resolved.error.hint, ErrorCode.USER_ERROR)
    return resolved.value


def build_context(
    *,
    overrides: Overrides,
    config_path: Path | None = None,
    root: Path | None = None,
) -> CLIContext:
    root = root or Path.cwd()
    console = RichConsole()
    config = load_pipeline_config(
        console=console, overrides=overrides, config_path=config_path, root=root
    )

    project_result = resolve_project(root, config)
    if isinstance(project_result, Err):
        _fail(
            console,
            project_result.error.message,
            project_result.error.hint,
            ErrorCode.ENV_ERROR,
        )

    return CLIContext(project=project_result.value, config=config, console=console)

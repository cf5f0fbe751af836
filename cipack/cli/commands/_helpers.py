"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import typer

from cipack.core.result import Err, Result
from cipack.output.errors import pipeline_error_exit_code, print_pipeline_error
from cipack.services.pipeline_errors import PipelineError

if TYPE_CHECKING:
    from cipack.output.console import ConsoleProtocol


T = TypeVar("T")


def exit_on_pipeline_error(
    result: Result[T, PipelineError],
    console: ConsoleProtocol,
) -> T:
    """Return the Ok value, or print the error and exit with its code.

    Replaces the common pattern:
        match result:
            case Err(e):
                print_pipeline_error(e, console)
                raise typer.Exit(code=pipeline_error_exit_code(e))
            case Ok(value):
                ...
    """
    if isinstance(result, Err):
        print_pipeline_error(result.error, console)
        raise typer.Exit(code=pipeline_error_exit_code(result.error))
    return result.value

"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cipack.core.errors import ErrorCode
from cipack.output.console import Style
from cipack.services.pipeline_errors import (
    ArchiveFailed,
    BinaryMissing,
    CompileFailed,
    DependencyInstallFailed,
    FormatCheckFailed,
    LintFailed,
    PipelineError,
    SettingMissing,
    TestsFailed,
    ToolMissing,
    VersionMissing,
)

if TYPE_CHECKING:
    from cipack.output.console import ConsoleProtocol

__all__ = ["print_pipeline_error", "pipeline_error_exit_code"]


def print_pipeline_error(error: PipelineError, console: ConsoleProtocol) -> None:
    """Print pipeline error to console with appropriate formatting."""
    match error:
        case DependencyInstallFailed(manager=manager, returncode=rc, detail=detail):
            console.error(f"{manager}: dependency install failed (exit {rc})")
            if detail:
                console.print(detail.strip(), Style.DIM)
        case FormatCheckFailed(returncode=rc):
            console.error(f"cargo fmt --check failed (exit {rc})")
            console.print("hint: run `cargo fmt` and commit the result", Style.DIM)
        case LintFailed(returncode=rc):
            console.error(f"cargo clippy reported warnings (exit {rc})")
        case CompileFailed(returncode=rc, release=release):
            mode = "release build" if release else "build"
            console.error(f"cargo {mode} failed (exit {rc})")
        case TestsFailed(returncode=rc):
            console.error(f"cargo test failed (exit {rc})")
        case ToolMissing(tool_id=tool_id, hint=hint):
            console.error(f"{tool_id}: missing")
            console.print(f"hint: {hint}", Style.DIM)
        case BinaryMissing(path=path):
            console.error(f"release binary not found: {path}")
            console.print("hint: check BIN_NAME matches a [[bin]] target", Style.DIM)
        case VersionMissing(binary=binary, reason=reason):
            console.error(f"could not read version from {binary} --version ({reason})")
        case ArchiveFailed(path=path, reason=reason):
            console.error(f"could not write {path}: {reason}")
        case SettingMissing(name=name, hint=hint):
            console.error(f"{name} is not set")
            console.print(f"hint: {hint}", Style.DIM)


def pipeline_error_exit_code(error: PipelineError) -> int:
    """Get exit code for a pipeline error."""
    match error:
        case SettingMissing():
            return int(ErrorCode.USER_ERROR)
        case DependencyInstallFailed() | ToolMissing():
            return int(ErrorCode.ENV_ERROR)
        case FormatCheckFailed() | LintFailed() | CompileFailed() | TestsFailed():
            return int(ErrorCode.BUILD_ERROR)
        case BinaryMissing() | VersionMissing():
            return int(ErrorCode.PACKAGE_ERROR)
        case ArchiveFailed():
            return int(ErrorCode.IO_ERROR)
    # Fallback for exhaustiveness
    return int(ErrorCode.BUILD_ERROR)

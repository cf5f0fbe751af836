"""Cargo invocations used by the pipelines.

Cargo is a system tool (installed through rustup in the CI image); we only
check that it is on PATH and run it from the project directory. Output
streams straight to the CI log.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable, Sequence
from pathlib import Path

from cipack.core.result import Err, Ok, Result
from cipack.output.console import ConsoleProtocol
from cipack.platform.process import CommandRunner, ProcessError, SubprocessRunner

from .pipeline_errors import (
    CompileFailed,
    FormatCheckFailed,
    LintFailed,
    TestsFailed,
    ToolMissing,
)

__all__ = ["CargoToolchain", "CARGO_INSTALL_HINT"]

CARGO_INSTALL_HINT = "Install Rust via https://rustup.rs/"

_LINT_TIMEOUT_SECONDS = 20 * 60.0
_COMPILE_TIMEOUT_SECONDS = 60 * 60.0
_TEST_TIMEOUT_SECONDS = 60 * 60.0


class CargoToolchain:
    """Runs cargo subcommands in one project directory."""

    def __init__(
        self,
        *,
        project_dir: Path,
        console: ConsoleProtocol,
        runner: CommandRunner | None = None,
        which: Callable[[str], str | None] = shutil.which,
        dry_run: bool = False,
    ) -> None:
        self._project_dir = project_dir
        self._console = console
        self._runner = runner or SubprocessRunner()
        self._which = which
        self._dry_run = dry_run

    def ensure_available(self) -> Result[None, ToolMissing]:
        if self._dry_run or self._which("cargo") is not None:
            return Ok(None)
        return Err(ToolMissing(tool_id="cargo", hint=CARGO_INSTALL_HINT))

    def _run(self, argv: list[str], *, timeout: float) -> Result[None, ProcessError]:
        self._console.command(argv)
        if self._dry_run:
            return Ok(None)
        return self._runner.run_silent(argv, cwd=self._project_dir, timeout=timeout)

    def fmt_check(self) -> Result[None, FormatCheckFailed]:
        """``cargo fmt --check``: fail if any file is not rustfmt-clean."""
        result = self._run(["cargo", "fmt", "--check"], timeout=_LINT_TIMEOUT_SECONDS)
        if isinstance(result, Err):
            return Err(FormatCheckFailed(returncode=result.error.returncode))
        return Ok(None)

    def clippy(self) -> Result[None, LintFailed]:
        """``cargo clippy -- -Dwarnings``: every warning is an error."""
        result = self._run(
            ["cargo", "clippy", "--", "-Dwarnings"], timeout=_LINT_TIMEOUT_SECONDS
        )
        if isinstance(result, Err):
            return Err(LintFailed(returncode=result.error.returncode))
        return Ok(None)

    def build(
        self, *, release: bool = False, extra_flags: Sequence[str] = ()
    ) -> Result[None, CompileFailed]:
        """Compile the project.

        Check runs use ``--verbose`` plus the extra flags; release builds are
        plain ``cargo build --release``.
        """
        argv = ["cargo", "build"]
        argv += ["--release"] if release else ["--verbose"]
        argv += list(extra_flags)
        result = self._run(argv, timeout=_COMPILE_TIMEOUT_SECONDS)
        if isinstance(result, Err):
            return Err(CompileFailed(returncode=result.error.returncode, release=release))
        return Ok(None)

    def test(self, *, extra_flags: Sequence[str] = ()) -> Result[None, TestsFailed]:
        result = self._run(
            ["cargo", "test", "--verbose", *extra_flags], timeout=_TEST_TIMEOUT_SECONDS
        )
        if isinstance(result, Err):
            return Err(TestsFailed(returncode=result.error.returncode))
        return Ok(None)

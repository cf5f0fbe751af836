"""Read a binary's version from its ``--version`` output.

Clap-style binaries print ``<name> <version>``; the version is the second
whitespace-delimited token of the first non-empty line.
"""

from __future__ import annotations

from pathlib import Path

from cipack.core.result import Err, Ok, Result
from cipack.platform.process import CommandRunner, SubprocessRunner

from .pipeline_errors import VersionMissing

__all__ = ["parse_version", "read_version"]

_VERSION_TIMEOUT_SECONDS = 60.0


def _first_line(text: str) -> str:
    for line in text.splitlines():
        line = line.strip()
        if line:
            return line
    return ""


def parse_version(output: str, *, binary: Path = Path("")) -> Result[str, VersionMissing]:
    """Extract the version token from ``--version`` output.

    >>> parse_version("repo-rs 0.3.1\\n")
    Ok('0.3.1')
    """
    line = _first_line(output)
    if not line:
        return Err(VersionMissing(binary=binary, output=output, reason="no output"))

    tokens = line.split()
    if len(tokens) < 2:
        return Err(
            VersionMissing(
                binary=binary,
                output=output,
                reason=f"expected '<name> <version>', got {line!r}",
            )
        )
    return Ok(tokens[1])


def read_version(
    binary: Path, *, runner: CommandRunner | None = None
) -> Result[str, VersionMissing]:
    """Run ``<binary> --version`` and parse the result."""
    runner = runner or SubprocessRunner()
    result = runner.run(
        [str(binary), "--version"], cwd=binary.parent, timeout=_VERSION_TIMEOUT_SECONDS
    )
    if isinstance(result, Err):
        e = result.error
        reason = f"--version exited with {e.returncode}"
        if e.stderr.strip():
            reason += f": {e.stderr.strip()}"
        return Err(VersionMissing(binary=binary, output=e.stdout, reason=reason))
    return parse_version(result.value, binary=binary)

"""Subprocess execution with Result-based error handling.

Two flavours:

- ``run`` captures stdout (used for ``<binary> --version``)
- ``run_silent`` lets output stream to the CI log (cargo, apk, apt-get)

Services never call these directly; they take a ``CommandRunner`` so tests
can substitute a fake that records commands.

Usage:
    result = run(["target/release/tool", "--version"], cwd=project_dir)
    match result:
        case Ok(stdout):
            print(stdout)
        case Err(error):
            print(f"Failed: {error}")
"""

from __future__ import annotations

import subprocess
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from cipack.core.result import Err, Ok, Result

__all__ = [
    "CommandRunner",
    "ProcessError",
    "ScriptedRunner",
    "SubprocessRunner",
    "run",
    "run_silent",
]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: Exit code, or -1 if the process never ran or timed out.
        stdout: Standard output (empty for streamed commands).
        stderr: Standard error, or the OS/timeout message.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def _timeout_error(cmd: list[str], timeout: float | None) -> ProcessError:
    return ProcessError(
        command=tuple(cmd),
        returncode=-1,
        stdout="",
        stderr=f"Command timed out after {timeout}s",
    )


def _os_error(cmd: list[str], e: OSError) -> ProcessError:
    return ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e))


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return its stdout.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(_timeout_error(cmd, timeout))
    except OSError as e:
        return Err(_os_error(cmd, e))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def run_silent(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[None, ProcessError]:
    """Execute a command, streaming its output to the terminal.

    Returns:
        Ok(None) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(_timeout_error(cmd, timeout))
    except OSError as e:
        return Err(_os_error(cmd, e))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout="",
                stderr="",
            )
        )

    return Ok(None)


class CommandRunner(Protocol):
    """Protocol for running commands.

    This abstraction allows replacing subprocess calls in tests.
    """

    def run(
        self,
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]: ...

    def run_silent(
        self,
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[None, ProcessError]: ...


class SubprocessRunner:
    """Default runner backed by the module-level functions."""

    def run(
        self,
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        return run(cmd, cwd, env, timeout=timeout)

    def run_silent(
        self,
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[None, ProcessError]:
        return run_silent(cmd, cwd, env, timeout=timeout)


@dataclass(frozen=True, slots=True)
class _Script:
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""
    action: Callable[[], None] | None = None


def _empty_calls() -> list[list[str]]:
    return []


def _empty_scripts() -> dict[tuple[str, ...], _Script]:
    return {}


@dataclass
class ScriptedRunner:
    """Runner that replays scripted results instead of spawning processes.

    Use this in tests. Scripts are matched by command prefix (longest wins);
    unscripted commands succeed with empty output. ``action`` runs before the
    result is returned, e.g. to create the file a build would produce.
    """

    calls: list[list[str]] = field(default_factory=_empty_calls)
    scripts: dict[tuple[str, ...], _Script] = field(default_factory=_empty_scripts)

    def script(
        self,
        *prefix: str,
        returncode: int = 0,
        stdout: str = "",
        stderr: str = "",
        action: Callable[[], None] | None = None,
    ) -> None:
        self.scripts[tuple(prefix)] = _Script(returncode, stdout, stderr, action)

    def _lookup(self, cmd: list[str]) -> _Script:
        best: tuple[str, ...] | None = None
        for prefix in self.scripts:
            if tuple(cmd[: len(prefix)]) != prefix:
                continue
            if best is None or len(prefix) > len(best):
                best = prefix
        return self.scripts[best] if best is not None else _Script()

    def _execute(self, cmd: list[str]) -> Result[str, ProcessError]:
        self.calls.append(list(cmd))
        script = self._lookup(cmd)
        if script.action is not None:
            script.action()
        if script.returncode != 0:
            return Err(
                ProcessError(
                    command=tuple(cmd),
                    returncode=script.returncode,
                    stdout=script.stdout,
                    stderr=script.stderr,
                )
            )
        return Ok(script.stdout)

    def run(
        self,
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        return self._execute(cmd)

    def run_silent(
        self,
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[None, ProcessError]:
        result = self._execute(cmd)
        if isinstance(result, Err):
            return result
        return Ok(None)

# SPDX-License-Identifier: MIT
"""Install the OS packages a cargo build needs.

Only the host's own package manager is driven (``apk`` or ``apt-get``) and
only with the package list from configuration. Nothing here runs through a
shell.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from cipack.core.config import DepsConfig
from cipack.core.result import Err, Ok, Result
from cipack.output.console import ConsoleProtocol, Style
from cipack.platform.detection import PackageManager, detect_package_manager
from cipack.platform.process import CommandRunner, SubprocessRunner

from .pipeline_errors import DependencyInstallFailed

__all__ = ["InstallPlan", "DependencyInstaller"]

_INSTALL_TIMEOUT_SECONDS = 15 * 60.0


@dataclass(frozen=True, slots=True)
class InstallPlan:
    manager: PackageManager
    packages: tuple[str, ...]
    commands: list[list[str]]

    @property
    def is_empty(self) -> bool:
        return not self.commands


class DependencyInstaller:
    """Plan and execute the dependency install step."""

    def __init__(
        self,
        *,
        console: ConsoleProtocol,
        runner: CommandRunner | None = None,
        which: Callable[[str], str | None] = shutil.which,
    ) -> None:
        self._console = console
        self._runner = runner or SubprocessRunner()
        self._which = which

    def plan(self, deps: DepsConfig) -> InstallPlan:
        manager = detect_package_manager(self._which)
        packages = deps.apk if manager == PackageManager.APK else deps.apt
        return InstallPlan(
            manager=manager,
            packages=packages,
            commands=manager.install_commands(packages),
        )

    def install(
        self, deps: DepsConfig, *, cwd: Path, dry_run: bool = False
    ) -> Result[InstallPlan, DependencyInstallFailed]:
        """Install packages, stopping at the first failing command."""
        plan = self.plan(deps)
        if plan.is_empty:
            self._console.print(f"No packages configured for {plan.manager}", Style.DIM)
            return Ok(plan)

        for argv in plan.commands:
            self._console.command(argv)
            if dry_run:
                continue
            result = self._runner.run_silent(argv, cwd=cwd, timeout=_INSTALL_TIMEOUT_SECONDS)
            if isinstance(result, Err):
                return Err(
                    DependencyInstallFailed(
                        manager=str(plan.manager),
                        returncode=result.error.returncode,
                        detail=result.error.stderr,
                    )
                )

        return Ok(plan)

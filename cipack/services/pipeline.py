"""Check and release pipelines.

Both pipelines are strictly sequential: each step blocks until it finishes
and the first failure is returned immediately, so no later step runs.

check:   deps -> [fmt -> clippy] -> build -> test
release: deps -> build --release -> version -> archive -> VERSION, ARCHIVE_NAME

The release pipeline never leaves artifacts that look like a finished
release: stale side files are removed before anything runs, the archive is
renamed into place only once complete, and ``ARCHIVE_NAME`` is written last.
"""

from __future__ import annotations

import shutil
import tarfile
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from cipack.core.config import ENV_BIN_NAME, ENV_TARGET, PipelineConfig
from cipack.core.result import Err, Ok, Result
from cipack.core.workspace import Project
from cipack.output.console import ConsoleProtocol, Style
from cipack.platform.process import CommandRunner, SubprocessRunner

from .archive import archive_name, create_archive, write_manifest, write_text_atomic
from .cargo import CargoToolchain
from .deps import DependencyInstaller
from .pipeline_errors import ArchiveFailed, BinaryMissing, PipelineError, SettingMissing
from .version import read_version

__all__ = ["CheckPipeline", "ReleaseArtifacts", "ReleasePipeline"]

MANIFEST_FILENAME = "manifest.json"
_DRY_RUN_VERSION = "<version>"


@dataclass(frozen=True, slots=True)
class ReleaseArtifacts:
    version: str
    archive: Path
    version_file: Path
    archive_name_file: Path
    manifest: Path | None = None


class _Pipeline:
    def __init__(
        self,
        *,
        project: Project,
        config: PipelineConfig,
        console: ConsoleProtocol,
        runner: CommandRunner | None = None,
        which: Callable[[str], str | None] = shutil.which,
        dry_run: bool = False,
    ) -> None:
        self._project = project
        self._config = config
        self._console = console
        self._runner = runner or SubprocessRunner()
        self._which = which
        self._dry_run = dry_run
        self._cargo = CargoToolchain(
            project_dir=project.project_dir,
            console=console,
            runner=self._runner,
            which=which,
            dry_run=dry_run,
        )

    def _install_deps(self) -> Result[None, PipelineError]:
        self._console.header("Dependencies")
        if not self._config.install_deps:
            self._console.print("Skipped (install_deps disabled)", Style.DIM)
            return Ok(None)

        installer = DependencyInstaller(
            console=self._console, runner=self._runner, which=self._which
        )
        result = installer.install(
            self._config.deps, cwd=self._project.root, dry_run=self._dry_run
        )
        if isinstance(result, Err):
            return result
        return Ok(None)


class CheckPipeline(_Pipeline):
    """Lint (optional), build and test a cargo project."""

    def run(self) -> Result[None, PipelineError]:
        deps = self._install_deps()
        if isinstance(deps, Err):
            return deps

        available = self._cargo.ensure_available()
        if isinstance(available, Err):
            return available

        if self._config.lint:
            self._console.header("Format")
            fmt = self._cargo.fmt_check()
            if isinstance(fmt, Err):
                return fmt

            self._console.header("Clippy")
            clippy = self._cargo.clippy()
            if isinstance(clippy, Err):
                return clippy

        self._console.header("Build")
        build = self._cargo.build(extra_flags=self._config.extra_build_flags)
        if isinstance(build, Err):
            return build

        self._console.header("Test")
        test = self._cargo.test(extra_flags=self._config.extra_test_flags)
        if isinstance(test, Err):
            return test

        return Ok(None)


class ReleasePipeline(_Pipeline):
    """Build a release binary and package it for distribution."""

    def run(self, *, manifest: bool = False) -> Result[ReleaseArtifacts, PipelineError]:
        bin_name = self._config.bin_name
        if bin_name is None:
            return Err(SettingMissing(name=ENV_BIN_NAME, hint="Pass --bin or export BIN_NAME"))
        target = self._config.target
        if target is None:
            return Err(SettingMissing(name=ENV_TARGET, hint="Pass --target or export TARGET"))

        if not self._dry_run:
            cleared = self._clear_markers()
            if isinstance(cleared, Err):
                return cleared

        deps = self._install_deps()
        if isinstance(deps, Err):
            return deps

        available = self._cargo.ensure_available()
        if isinstance(available, Err):
            return available

        self._console.header("Build")
        build = self._cargo.build(release=True)
        if isinstance(build, Err):
            return build

        binary = self._project.release_binary(bin_name)

        self._console.header("Version")
        self._console.command([str(binary), "--version"])
        if self._dry_run:
            version = _DRY_RUN_VERSION
        else:
            if not binary.is_file():
                return Err(BinaryMissing(path=binary))
            version_result = read_version(binary, runner=self._runner)
            if isinstance(version_result, Err):
                return version_result
            version = version_result.value

        self._console.info(f"Packaging {version} for {target}")

        self._console.header("Package")
        name = archive_name(bin_name, version, target)
        artifacts = ReleaseArtifacts(
            version=version,
            archive=self._project.release_dir / name,
            version_file=self._project.version_file,
            archive_name_file=self._project.archive_name_file,
            manifest=(self._project.release_dir / MANIFEST_FILENAME) if manifest else None,
        )
        self._console.command(["tar", "czf", str(artifacts.archive), bin_name])
        if self._dry_run:
            return Ok(artifacts)

        return self._package(binary, bin_name=bin_name, target=target, artifacts=artifacts)

    def _package(
        self,
        binary: Path,
        *,
        bin_name: str,
        target: str,
        artifacts: ReleaseArtifacts,
    ) -> Result[ReleaseArtifacts, PipelineError]:
        try:
            create_archive(binary, artifacts.archive, arcname=bin_name)
        except (OSError, tarfile.TarError) as e:
            return Err(ArchiveFailed(path=artifacts.archive, reason=str(e)))

        written: list[Path] = [artifacts.archive]
        try:
            if artifacts.manifest is not None:
                write_manifest(
                    artifacts.manifest,
                    archive=artifacts.archive,
                    bin_name=bin_name,
                    version=artifacts.version,
                    target=target,
                )
                written.append(artifacts.manifest)
            write_text_atomic(artifacts.version_file, f"{artifacts.version}\n")
            written.append(artifacts.version_file)
            write_text_atomic(artifacts.archive_name_file, f"{artifacts.archive.name}\n")
        except OSError as e:
            for path in written:
                path.unlink(missing_ok=True)
            return Err(ArchiveFailed(path=self._project.release_dir, reason=str(e)))

        return Ok(artifacts)

    def _clear_markers(self) -> Result[None, ArchiveFailed]:
        """Remove side files left by a previous run."""
        for path in (self._project.version_file, self._project.archive_name_file):
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                return Err(ArchiveFailed(path=path, reason=str(e)))
        return Ok(None)

"""Project layout for a pipeline run.

A run happens from a root directory (the CI task directory). Below it:

- the cargo project (``project_dir``, contains ``Cargo.toml``)
- the release directory receiving the archive and its side files
- optionally ``cipack.toml``

Cargo writes to ``<project>/target`` unless ``CARGO_TARGET_DIR`` says
otherwise; a relative ``CARGO_TARGET_DIR`` is relative to the project, since
cargo runs there.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config import CONFIG_FILENAME, PipelineConfig
from .result import Err, Ok, Result

__all__ = [
    "ARCHIVE_NAME_FILENAME",
    "Project",
    "ProjectError",
    "VERSION_FILENAME",
    "default_config_path",
    "resolve_project",
]

VERSION_FILENAME = "VERSION"
ARCHIVE_NAME_FILENAME = "ARCHIVE_NAME"


@dataclass(frozen=True)
class ProjectError:
    """Error when the cargo project cannot be located."""

    message: str
    searched_from: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class Project:
    """Resolved paths for one run."""

    root: Path
    project_dir: Path
    release_dir: Path
    cargo_target_dir: Path | None = None

    @property
    def manifest_path(self) -> Path:
        """Path to Cargo.toml."""
        return self.project_dir / "Cargo.toml"

    @property
    def target_dir(self) -> Path:
        """Cargo output directory."""
        if self.cargo_target_dir is None:
            return self.project_dir / "target"
        if self.cargo_target_dir.is_absolute():
            return self.cargo_target_dir
        return self.project_dir / self.cargo_target_dir

    def release_binary(self, bin_name: str) -> Path:
        """Path of ``cargo build --release`` output for a binary."""
        return self.target_dir / "release" / bin_name

    @property
    def version_file(self) -> Path:
        return self.release_dir / VERSION_FILENAME

    @property
    def archive_name_file(self) -> Path:
        return self.release_dir / ARCHIVE_NAME_FILENAME

    def __str__(self) -> str:
        return str(self.project_dir)


def default_config_path(root: Path) -> Path:
    return root / CONFIG_FILENAME


def resolve_project(root: Path, config: PipelineConfig) -> Result[Project, ProjectError]:
    """Resolve project paths from config, relative to ``root``.

    Returns Err if the project directory has no Cargo.toml.
    """
    root = root.resolve()
    project_dir = (root / config.project_dir).resolve()
    if not (project_dir / "Cargo.toml").is_file():
        return Err(
            ProjectError(
                message=f"No Cargo.toml found in {project_dir}",
                searched_from=root,
                hint="Pass --project-dir or set [pipeline].project_dir in cipack.toml",
            )
        )

    return Ok(
        Project(
            root=root,
            project_dir=project_dir,
            release_dir=(root / config.release_dir).resolve(),
            cargo_target_dir=config.cargo_target_dir,
        )
    )

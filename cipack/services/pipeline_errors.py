from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class DependencyInstallFailed:
    manager: str
    returncode: int
    detail: str = ""


@dataclass(frozen=True, slots=True)
class FormatCheckFailed:
    returncode: int


@dataclass(frozen=True, slots=True)
class LintFailed:
    returncode: int


@dataclass(frozen=True, slots=True)
class CompileFailed:
    returncode: int
    release: bool = False


@dataclass(frozen=True, slots=True)
class TestsFailed:
    returncode: int


@dataclass(frozen=True, slots=True)
class ToolMissing:
    tool_id: str
    hint: str


@dataclass(frozen=True, slots=True)
class BinaryMissing:
    path: Path


@dataclass(frozen=True, slots=True)
class VersionMissing:
    binary: Path
    output: str
    reason: str


@dataclass(frozen=True, slots=True)
class ArchiveFailed:
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class SettingMissing:
    name: str
    hint: str


PipelineError = (
    DependencyInstallFailed
    | FormatCheckFailed
    | LintFailed
    | CompileFailed
    | TestsFailed
    | ToolMissing
    | BinaryMissing
    | VersionMissing
    | ArchiveFailed
    | SettingMissing
)

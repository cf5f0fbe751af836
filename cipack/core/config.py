"""Typed configuration loading and resolution.

Configuration comes from three layers, highest priority first:

1. CLI options (``Overrides``)
2. Environment variables (the names CI jobs already export)
3. ``cipack.toml`` (``FileConfig``)

``resolve_pipeline_config`` merges them into the immutable ``PipelineConfig``
the pipelines consume.
"""

from __future__ import annotations

import shlex
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DepsConfig",
    "FileConfig",
    "Overrides",
    "PipelineConfig",
    "load_config",
    "load_config_or_default",
    "parse_lint_flag",
    "resolve_pipeline_config",
    "split_flags",
]

CONFIG_FILENAME = "cipack.toml"

# Environment variables
ENV_LINT = "LINT"
ENV_EXTRA_BUILD_FLAGS = "EXTRA_CARGO_BUILD_FLAGS"
ENV_EXTRA_TEST_FLAGS = "EXTRA_CARGO_TEST_FLAGS"
ENV_TARGET = "TARGET"
ENV_BIN_NAME = "BIN_NAME"
ENV_CARGO_TARGET_DIR = "CARGO_TARGET_DIR"

# OpenSSL headers + pkg-config are what the openssl-sys crate needs to build.
DEFAULT_APK_PACKAGES: tuple[str, ...] = ("openssl", "openssl-dev", "pkgconfig")
DEFAULT_APT_PACKAGES: tuple[str, ...] = ("libssl-dev", "pkg-config")

DEFAULT_PROJECT_DIR = "."
DEFAULT_RELEASE_DIR = "release"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when configuration cannot be loaded or is invalid."""

    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class DepsConfig:
    """OS packages installed before building, per package manager."""

    apk: tuple[str, ...] = DEFAULT_APK_PACKAGES
    apt: tuple[str, ...] = DEFAULT_APT_PACKAGES


@dataclass(frozen=True, slots=True)
class FileConfig:
    """Values read from cipack.toml. None means "not set in the file"."""

    lint: bool | None = None
    extra_build_flags: str | None = None
    extra_test_flags: str | None = None
    project_dir: str | None = None
    release_dir: str | None = None
    install_deps: bool | None = None
    bin_name: str | None = None
    target: str | None = None
    deps: DepsConfig = field(default_factory=DepsConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> FileConfig:
        """Create FileConfig from a mapping (parsed TOML)."""
        pipeline: StrDict = get_table(data, "pipeline") or {}
        release: StrDict = get_table(data, "release") or {}
        deps: StrDict = get_table(data, "deps") or {}

        apk = get_str_list(deps, "apk")
        apt = get_str_list(deps, "apt")

        return cls(
            lint=get_bool(pipeline, "lint"),
            extra_build_flags=get_str(pipeline, "extra_build_flags"),
            extra_test_flags=get_str(pipeline, "extra_test_flags"),
            project_dir=get_str(pipeline, "project_dir"),
            release_dir=get_str(pipeline, "release_dir"),
            install_deps=get_bool(pipeline, "install_deps"),
            bin_name=get_str(release, "bin_name"),
            target=get_str(release, "target"),
            deps=DepsConfig(
                apk=tuple(apk) if apk is not None else DEFAULT_APK_PACKAGES,
                apt=tuple(apt) if apt is not None else DEFAULT_APT_PACKAGES,
            ),
        )


@dataclass(frozen=True, slots=True)
class Overrides:
    """Values given explicitly on the command line."""

    lint: bool | None = None
    build_flags: str | None = None
    test_flags: str | None = None
    bin_name: str | None = None
    target: str | None = None
    project_dir: Path | None = None
    release_dir: Path | None = None
    install_deps: bool | None = None


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Fully resolved settings for one pipeline run."""

    lint: bool = False
    extra_build_flags: tuple[str, ...] = ()
    extra_test_flags: tuple[str, ...] = ()
    bin_name: str | None = None
    target: str | None = None
    project_dir: Path = Path(DEFAULT_PROJECT_DIR)
    release_dir: Path = Path(DEFAULT_RELEASE_DIR)
    cargo_target_dir: Path | None = None
    install_deps: bool = True
    deps: DepsConfig = field(default_factory=DepsConfig)


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[FileConfig, ConfigError]:
    """Load and parse cipack.toml.

    Args:
        path: Path to the config file

    Returns:
        Ok(FileConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result
    return Ok(FileConfig.from_dict(result.value))


def load_config_or_default(path: Path) -> Result[FileConfig, ConfigError]:
    """Load config if the file exists, otherwise return empty defaults.

    A file that exists but cannot be parsed is still an error: a CI run must
    not silently ignore a broken config.
    """
    if not path.exists():
        return Ok(FileConfig())
    return load_config(path)


def parse_lint_flag(raw: str | None) -> Result[bool, ConfigError]:
    """Interpret the LINT variable as an integer compare against 1.

    Unset or blank means "no lint". ``01`` counts as 1, anything that is not
    an integer is rejected.
    """
    if raw is None or not raw.strip():
        return Ok(False)
    try:
        return Ok(int(raw.strip()) == 1)
    except ValueError:
        return Err(
            ConfigError(
                f"{ENV_LINT} must be an integer, got {raw!r}",
                hint=(
                    f"Set {ENV_LINT}=1 to enable fmt and clippy or {ENV_LINT}=0 to skip them "
                    "(the old lint-and-test.sh script skipped lint on such values)"
                ),
            )
        )


def split_flags(raw: str | None, *, source: str) -> Result[tuple[str, ...], ConfigError]:
    """Split extra cargo flags the way a POSIX shell would."""
    if raw is None or not raw.strip():
        return Ok(())
    try:
        return Ok(tuple(shlex.split(raw)))
    except ValueError as e:
        return Err(ConfigError(f"Cannot parse {source} ({e}): {raw!r}"))


def _first(*values: str | None) -> str | None:
    """First non-blank value, stripped. Used for names where "" means unset."""
    for v in values:
        if v is not None and v.strip():
            return v.strip()
    return None


def _first_set(*values: str | None) -> str | None:
    """First value that is set at all; an empty string still wins."""
    for v in values:
        if v is not None:
            return v
    return None


def resolve_pipeline_config(
    file: FileConfig,
    env: Mapping[str, str],
    overrides: Overrides | None = None,
) -> Result[PipelineConfig, ConfigError]:
    """Merge CLI overrides, environment and cipack.toml into a PipelineConfig."""
    ov = overrides or Overrides()

    if ov.lint is not None:
        lint = ov.lint
    elif env.get(ENV_LINT, "").strip():
        lint_result = parse_lint_flag(env.get(ENV_LINT))
        if isinstance(lint_result, Err):
            return lint_result
        lint = lint_result.value
    else:
        lint = bool(file.lint)

    build_flags = split_flags(
        _first_set(ov.build_flags, env.get(ENV_EXTRA_BUILD_FLAGS), file.extra_build_flags),
        source="extra build flags",
    )
    if isinstance(build_flags, Err):
        return build_flags

    test_flags = split_flags(
        _first_set(ov.test_flags, env.get(ENV_EXTRA_TEST_FLAGS), file.extra_test_flags),
        source="extra test flags",
    )
    if isinstance(test_flags, Err):
        return test_flags

    project_dir = ov.project_dir or Path(file.project_dir or DEFAULT_PROJECT_DIR)
    release_dir = ov.release_dir or Path(file.release_dir or DEFAULT_RELEASE_DIR)

    cargo_target_raw = env.get(ENV_CARGO_TARGET_DIR, "").strip()
    cargo_target_dir = Path(cargo_target_raw) if cargo_target_raw else None

    if ov.install_deps is not None:
        install_deps = ov.install_deps
    elif file.install_deps is not None:
        install_deps = file.install_deps
    else:
        install_deps = True

    return Ok(
        PipelineConfig(
            lint=lint,
            extra_build_flags=build_flags.value,
            extra_test_flags=test_flags.value,
            bin_name=_first(ov.bin_name, env.get(ENV_BIN_NAME), file.bin_name),
            target=_first(ov.target, env.get(ENV_TARGET), file.target),
            project_dir=project_dir,
            release_dir=release_dir,
            cargo_target_dir=cargo_target_dir,
            install_deps=install_deps,
            deps=file.deps,
        )
    )

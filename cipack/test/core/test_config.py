"""Tests for cipack.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from cipack.core.config import (
    DEFAULT_APK_PACKAGES,
    DEFAULT_APT_PACKAGES,
    DepsConfig,
    FileConfig,
    Overrides,
    PipelineConfig,
    load_config,
    load_config_or_default,
    parse_lint_flag,
    resolve_pipeline_config,
    split_flags,
)
from cipack.core.result import Err, Ok

FULL_TOML = """
[pipeline]
lint = true
extra_build_flags = "--locked --features 'a b'"
extra_test_flags = "--all-features"
project_dir = "repo"
release_dir = "out"
install_deps = false

[release]
bin_name = "repo-rs"
target = "x86_64-unknown-linux-musl"

[deps]
apk = ["openssl-dev"]
apt = ["libssl-dev", "", "pkg-config"]
"""


class TestDefaults:
    """Test dataclass defaults."""

    def test_deps_defaults(self) -> None:
        deps = DepsConfig()
        assert deps.apk == ("openssl", "openssl-dev", "pkgconfig")
        assert deps.apt == ("libssl-dev", "pkg-config")

    def test_pipeline_defaults(self) -> None:
        config = PipelineConfig()
        assert config.lint is False
        assert config.extra_build_flags == ()
        assert config.release_dir == Path("release")
        assert config.install_deps is True

    def test_frozen(self) -> None:
        config = PipelineConfig()
        with pytest.raises(AttributeError):
            config.lint = True  # type: ignore[misc]


class TestLoadConfig:
    """Test loading cipack.toml."""

    def test_full_file(self, tmp_path: Path) -> None:
        path = tmp_path / "cipack.toml"
        path.write_text(FULL_TOML, encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Ok)
        config = result.value
        assert config.lint is True
        assert config.extra_build_flags == "--locked --features 'a b'"
        assert config.project_dir == "repo"
        assert config.release_dir == "out"
        assert config.install_deps is False
        assert config.bin_name == "repo-rs"
        assert config.target == "x86_64-unknown-linux-musl"
        assert config.deps.apk == ("openssl-dev",)
        assert config.deps.apt == ("libssl-dev", "pkg-config")

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "nope.toml")

        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "cipack.toml"
        path.write_text("[pipeline\nlint = ", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message
        assert result.error.path == path

    def test_wrong_types_fall_back(self, tmp_path: Path) -> None:
        path = tmp_path / "cipack.toml"
        path.write_text('[pipeline]\nlint = "yes"\n[deps]\napk = [1, 2]\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Ok)
        assert result.value.lint is None
        assert result.value.deps.apk == DEFAULT_APK_PACKAGES

    def test_or_default_when_missing(self, tmp_path: Path) -> None:
        result = load_config_or_default(tmp_path / "cipack.toml")

        assert result == Ok(FileConfig())

    def test_or_default_still_reports_broken_file(self, tmp_path: Path) -> None:
        path = tmp_path / "cipack.toml"
        path.write_text("not toml at all [", encoding="utf-8")

        assert isinstance(load_config_or_default(path), Err)


class TestParseLintFlag:
    """LINT is compared as an integer against 1."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(None, False), ("", False), ("  ", False), ("1", True), ("01", True), ("0", False), ("2", False)],
    )
    def test_values(self, raw: str | None, expected: bool) -> None:
        assert parse_lint_flag(raw) == Ok(expected)

    def test_non_integer_is_error(self) -> None:
        result = parse_lint_flag("true")

        assert isinstance(result, Err)
        assert "LINT" in result.error.message
        assert result.error.hint is not None
        assert "skipped lint" in result.error.hint


class TestSplitFlags:
    def test_shell_words(self) -> None:
        assert split_flags("--features 'a b' -j 2", source="x") == Ok(
            ("--features", "a b", "-j", "2")
        )

    def test_empty(self) -> None:
        assert split_flags(None, source="x") == Ok(())
        assert split_flags("   ", source="x") == Ok(())

    def test_unbalanced_quote(self) -> None:
        result = split_flags("--features 'a", source="extra build flags")

        assert isinstance(result, Err)
        assert "extra build flags" in result.error.message


class TestResolvePipelineConfig:
    """Precedence: overrides > env > file > default."""

    def test_defaults(self) -> None:
        result = resolve_pipeline_config(FileConfig(), {})

        assert result == Ok(PipelineConfig())

    def test_env_values(self) -> None:
        env = {
            "LINT": "1",
            "EXTRA_CARGO_BUILD_FLAGS": "--locked",
            "EXTRA_CARGO_TEST_FLAGS": "-- --nocapture",
            "TARGET": "aarch64-unknown-linux-gnu",
            "BIN_NAME": "tool",
            "CARGO_TARGET_DIR": "/cache/target",
        }

        result = resolve_pipeline_config(FileConfig(), env)

        assert isinstance(result, Ok)
        config = result.value
        assert config.lint is True
        assert config.extra_build_flags == ("--locked",)
        assert config.extra_test_flags == ("--", "--nocapture")
        assert config.target == "aarch64-unknown-linux-gnu"
        assert config.bin_name == "tool"
        assert config.cargo_target_dir == Path("/cache/target")

    def test_env_beats_file(self) -> None:
        file = FileConfig(lint=True, bin_name="from-file", extra_build_flags="--offline")
        env = {"LINT": "0", "BIN_NAME": "from-env"}

        result = resolve_pipeline_config(file, env)

        assert isinstance(result, Ok)
        assert result.value.lint is False
        assert result.value.bin_name == "from-env"
        assert result.value.extra_build_flags == ("--offline",)

    def test_overrides_beat_env(self) -> None:
        env = {"LINT": "1", "TARGET": "env-target", "EXTRA_CARGO_TEST_FLAGS": "--env"}
        overrides = Overrides(lint=False, target="cli-target", test_flags="--cli")

        result = resolve_pipeline_config(FileConfig(), env, overrides)

        assert isinstance(result, Ok)
        assert result.value.lint is False
        assert result.value.target == "cli-target"
        assert result.value.extra_test_flags == ("--cli",)

    def test_override_lint_ignores_invalid_env(self) -> None:
        result = resolve_pipeline_config(FileConfig(), {"LINT": "yes"}, Overrides(lint=True))

        assert isinstance(result, Ok)
        assert result.value.lint is True

    def test_invalid_lint_env_is_error(self) -> None:
        result = resolve_pipeline_config(FileConfig(), {"LINT": "yes"})

        assert isinstance(result, Err)

    def test_blank_env_does_not_mask_file(self) -> None:
        file = FileConfig(target="file-target")

        result = resolve_pipeline_config(file, {"TARGET": "  "})

        assert isinstance(result, Ok)
        assert result.value.target == "file-target"

    def test_paths_and_install_deps(self) -> None:
        file = FileConfig(project_dir="repo", release_dir="out", install_deps=False)

        result = resolve_pipeline_config(file, {}, Overrides(release_dir=Path("dist")))

        assert isinstance(result, Ok)
        assert result.value.project_dir == Path("repo")
        assert result.value.release_dir == Path("dist")
        assert result.value.install_deps is False

    def test_skip_deps_override(self) -> None:
        result = resolve_pipeline_config(
            FileConfig(install_deps=True), {}, Overrides(install_deps=False)
        )

        assert isinstance(result, Ok)
        assert result.value.install_deps is False

    def test_deps_come_from_file(self) -> None:
        file = FileConfig(deps=DepsConfig(apk=("musl-dev",), apt=DEFAULT_APT_PACKAGES))

        result = resolve_pipeline_config(file, {})

        assert isinstance(result, Ok)
        assert result.value.deps.apk == ("musl-dev",)

    def test_empty_override_clears_env_flags(self) -> None:
        env = {"EXTRA_CARGO_BUILD_FLAGS": "--features slow"}

        result = resolve_pipeline_config(FileConfig(), env, Overrides(build_flags=""))

        assert isinstance(result, Ok)
        assert result.value.extra_build_flags == ()

    def test_empty_env_flags_mask_file(self) -> None:
        file = FileConfig(extra_test_flags="--release")

        result = resolve_pipeline_config(file, {"EXTRA_CARGO_TEST_FLAGS": ""})

        assert isinstance(result, Ok)
        assert result.value.extra_test_flags == ()

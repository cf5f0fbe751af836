"""Tests for cipack.platform.detection module."""

from __future__ import annotations

from collections.abc import Callable

from cipack.platform.detection import PackageManager, detect_package_manager


def _which_only(*present: str) -> Callable[[str], str | None]:
    def which(name: str) -> str | None:
        return f"/usr/bin/{name}" if name in present else None

    return which


class TestDetectPackageManager:
    def test_apk_when_present(self) -> None:
        assert detect_package_manager(_which_only("apk", "apt-get")) == PackageManager.APK

    def test_apt_otherwise(self) -> None:
        assert detect_package_manager(_which_only()) == PackageManager.APT

    def test_apt_even_without_apt_get(self) -> None:
        # A missing apt-get surfaces as an install failure, not a detection error.
        assert detect_package_manager(_which_only("dnf")) == PackageManager.APT


class TestInstallCommands:
    def test_apk(self) -> None:
        commands = PackageManager.APK.install_commands(("openssl", "openssl-dev"))

        assert commands == [["apk", "add", "openssl", "openssl-dev"]]

    def test_apt_updates_first(self) -> None:
        commands = PackageManager.APT.install_commands(("libssl-dev", "pkg-config"))

        assert commands == [
            ["apt-get", "update"],
            ["apt-get", "install", "-y", "libssl-dev", "pkg-config"],
        ]

    def test_no_packages(self) -> None:
        assert PackageManager.APT.install_commands(()) == []

    def test_str_and_executable(self) -> None:
        assert str(PackageManager.APK) == "apk"
        assert PackageManager.APT.executable == "apt-get"

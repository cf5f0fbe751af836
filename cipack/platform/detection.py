"""Host package manager detection.

CI images are either Alpine (``apk``) or Debian/Ubuntu (``apt-get``). The
check is the same one the CI scripts always used: if ``apk`` is on PATH the
host is Alpine, otherwise it is assumed to be Debian-like.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from enum import Enum, auto

__all__ = ["PackageManager", "detect_package_manager"]


class PackageManager(Enum):
    """OS package manager family."""

    APK = auto()  # Alpine
    APT = auto()  # Debian, Ubuntu

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def executable(self) -> str:
        return {PackageManager.APK: "apk", PackageManager.APT: "apt-get"}[self]

    def install_commands(self, packages: tuple[str, ...]) -> list[list[str]]:
        """Commands that install ``packages``, in execution order.

        apt needs its index refreshed first; apk fetches it on demand.
        """
        if not packages:
            return []
        match self:
            case PackageManager.APK:
                return [[self.executable, "add", *packages]]
            case PackageManager.APT:
                return [
                    [self.executable, "update"],
                    [self.executable, "install", "-y", *packages],
                ]


def detect_package_manager(which: Callable[[str], str | None] = shutil.which) -> PackageManager:
    """Detect the host package manager."""
    if which("apk") is not None:
        return PackageManager.APK
    return PackageManager.APT

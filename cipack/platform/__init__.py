"""Platform abstraction layer."""

from .detection import PackageManager, detect_package_manager
from .process import CommandRunner, ProcessError, SubprocessRunner, run, run_silent

__all__ = [
    # detection
    "PackageManager",
    "detect_package_manager",
    # process
    "CommandRunner",
    "ProcessError",
    "SubprocessRunner",
    "run",
    "run_silent",
]

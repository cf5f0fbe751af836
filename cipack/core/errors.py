"""Exit codes for the CLI.

Every pipeline failure is fatal and maps to one of these codes. The values
are part of the CLI contract (CI jobs may branch on them) and must stay
stable:

- 0: Success
- 1: User error (bad option, invalid config or environment value)
- 2: Environment error (dependency install failed, toolchain missing)
- 3: Build error (format check, clippy, compile or tests failed)
- 4: Package error (release binary missing, no version output)
- 5: I/O error (archive or metadata files could not be written)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes for cipack commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3
    PACKAGE_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK

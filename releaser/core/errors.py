"""Exit codes for the releaser CLI.

Each code maps to one class of outcome so scripts driving a release can tell
a configuration mistake from a release that ran and failed.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes. Values are stable.

    - 0: Success
    - 1: User error (bad version string, bad arguments)
    - 2: Configuration error (unreadable or invalid releaser.toml)
    - 3: Release failed (at least one task reported FAILURE)
    - 4: Release unstable (no failure, at least one UNSTABLE task)
    - 5: I/O error (BOM descriptor missing or unreadable)
    """

    OK = 0
    USER_ERROR = 1
    CONFIG_ERROR = 2
    RELEASE_FAILED = 3
    RELEASE_UNSTABLE = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK

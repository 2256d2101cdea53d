"""Process exit codes for the relkit CLI."""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0
    # bad arguments or relkit.toml
    USER_ERROR = 1
    # --project is not a directory
    ENV_ERROR = 2
    # not ready for release, or a release step failed
    RELEASE_ERROR = 3
    # descriptor file unreadable or unwritable
    IO_ERROR = 4

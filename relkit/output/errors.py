"""Error presentation utilities."""

from __future__ import annotations

from typing import TYPE_CHECKING

from relkit.core.errors import ErrorCode
from relkit.output.console import Style

if TYPE_CHECKING:
    from relkit.output.console import ConsoleProtocol
    from relkit.services.errors import ReleaseError

__all__ = ["print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    """Print a release error, with its hint dimmed on the next line."""
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def release_error_exit_code(error: ReleaseError) -> int:
    match error.kind:
        case "config_invalid" | "invalid_input":
            return int(ErrorCode.USER_ERROR)
        case "missing_task" | "unknown_step":
            return int(ErrorCode.USER_ERROR)
        case _:
            return int(ErrorCode.RELEASE_ERROR)

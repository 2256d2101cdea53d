"""Shared helpers for CLI commands."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, NoReturn

import typer

from relkit.core.errors import ErrorCode
from relkit.output.console import Style
from relkit.output.errors import release_error_exit_code
from relkit.services.runner import RunnerState

if TYPE_CHECKING:
    from relkit.cli.context import CLIContext


def run_steps(ctx: CLIContext, steps: Sequence[str]) -> RunnerState:
    """Run ``steps`` through the runner, exiting non-zero if any step fails.

    The exit code follows the error the failing step recorded; a plain
    "not ready" answer exits with RELEASE_ERROR.

    I/O errors from descriptor files end the command with IO_ERROR.
    """
    state = RunnerState(project=ctx.project, remaining=tuple(steps))
    try:
        final = ctx.runner.run(state)
    except OSError as e:
        ctx.console.error(str(e))
        exit_with_code(int(ErrorCode.IO_ERROR))

    if final.failed:
        if final.remaining:
            ctx.console.print(f"not run: {', '.join(final.remaining)}", Style.DIM)
        if final.error is not None:
            exit_with_code(release_error_exit_code(final.error))
        exit_with_code(int(ErrorCode.RELEASE_ERROR))
    return final


def print_version(ctx: CLIContext, state: RunnerState) -> None:
    version = state.project.version or "(none)"
    ctx.console.print(f"version: {version}")


def exit_with_code(code: int) -> NoReturn:
    """Exit with given code. Explicit helper for clarity."""
    raise typer.Exit(code=code)

from __future__ import annotations

import typer

from relkit.cli.commands._helpers import exit_with_code, run_steps
from relkit.cli.context import build_context
from relkit.core.errors import ErrorCode
from relkit.core.result import Err, Ok
from relkit.output.console import Style
from relkit.output.errors import print_release_error, release_error_exit_code
from relkit.services.release import READY_TASK, missing_ready_task, release_publish
from relkit.services.runner import RunnerState


def ready() -> None:
    """Check that the source tree and project can be released."""
    ctx = build_context()
    outcome = ctx.runner.run_task(READY_TASK, RunnerState(project=ctx.project))
    if outcome is None:
        error = missing_ready_task()
        print_release_error(error, ctx.console)
        exit_with_code(release_error_exit_code(error))

    _, result = outcome
    match result:
        case Err(error):
            print_release_error(error, ctx.console)
            exit_with_code(release_error_exit_code(error))
        case Ok(False):
            exit_with_code(int(ErrorCode.RELEASE_ERROR))
        case Ok(_):
            pass


def publish(
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Check readiness and print the steps without running them."
    ),
) -> None:
    """Publish and tag a release, then bump to the next snapshot."""
    ctx = build_context()
    if not dry_run:
        final = run_steps(ctx, ["releasePublish"])
        ctx.console.success(f"released; now at {final.project.version}")
        return

    planned = release_publish(ctx.runner, RunnerState(project=ctx.project))
    if planned.failed:
        if planned.error is not None:
            exit_with_code(release_error_exit_code(planned.error))
        exit_with_code(int(ErrorCode.RELEASE_ERROR))
    ctx.console.header("Release steps")
    for index, step in enumerate(planned.remaining, start=1):
        ctx.console.print(f"{index}. {step}")
    ctx.console.print("(dry-run) nothing was executed", Style.DIM)

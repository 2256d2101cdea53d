"""Publish and git steps of the release sequence.

These shell out: the publish commands come from ``[release]`` in
relkit.toml, git runs in the project root. A failed command fails the run;
nothing is retried or rolled back.
"""

from __future__ import annotations

from collections.abc import Sequence

from relkit.core.result import Err
from relkit.platform.process import run_streaming
from relkit.services.errors import ReleaseError
from relkit.services.runner import CommandRunner, CommandSpec, RunnerState

__all__ = ["STEP_COMMANDS", "git_commit", "git_tag", "publish", "publish_local"]


def _run_publish_command(
    runner: CommandRunner, state: RunnerState, argv: Sequence[str], label: str
) -> RunnerState:
    if not argv:
        runner.console.warning(f"no {label} command configured, skipping")
        return state

    runner.console.info(" ".join(argv))
    result = run_streaming(list(argv), cwd=state.project.root)
    if isinstance(result, Err):
        return runner.abort(
            state,
            ReleaseError(kind="publish_failed", message=f"{label} failed", hint=str(result.error)),
        )
    return state


def publish_local(runner: CommandRunner, state: RunnerState, args: tuple[str, ...]) -> RunnerState:
    return _run_publish_command(runner, state, state.project.config.release.publish_local, "publishLocal")


def publish(runner: CommandRunner, state: RunnerState, args: tuple[str, ...]) -> RunnerState:
    return _run_publish_command(runner, state, state.project.config.release.publish, "publish")


def _missing_version(runner: CommandRunner, state: RunnerState) -> RunnerState:
    return runner.abort(
        state,
        ReleaseError(
            kind="missing_version",
            message=f"No version declaration found in {state.project.root}",
        ),
    )


def git_commit(runner: CommandRunner, state: RunnerState, args: tuple[str, ...]) -> RunnerState:
    """Commit all tracked changes with the configured message."""
    version = state.project.version
    if version is None:
        return _missing_version(runner, state)

    message = state.project.config.release.commit_message.format(version=version)
    result = runner.repository(state).commit(message)
    if isinstance(result, Err):
        return runner.abort(
            state,
            ReleaseError(kind="git_failed", message="git commit failed", hint=result.error.message),
        )

    runner.console.success(message)
    return state


def git_tag(runner: CommandRunner, state: RunnerState, args: tuple[str, ...]) -> RunnerState:
    """Tag HEAD with the current version."""
    version = state.project.version
    if version is None:
        return _missing_version(runner, state)

    name = state.project.config.release.tag_format.format(version=version)
    result = runner.repository(state).tag(name, f"Release {version}")
    if isinstance(result, Err):
        return runner.abort(
            state,
            ReleaseError(kind="git_failed", message=f"git tag {name} failed", hint=result.error.message),
        )

    runner.console.success(f"Tagged {name}")
    return state


STEP_COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(name="publishLocal", help="Publish artifacts locally", handler=publish_local),
    CommandSpec(name="publish", help="Publish artifacts to the remote repository", handler=publish),
    CommandSpec(name="gitCommit", help="Commit all tracked changes", handler=git_commit),
    CommandSpec(name="gitTag", help="Tag HEAD with the current version", handler=git_tag),
)

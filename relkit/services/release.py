"""Release readiness and the publish sequence.

``is_release_ready`` is re-evaluated from scratch on every call. Conditions
are checked in order and the first failing one is reported and wins:

1. the git working tree must be clean
2. no dependency may be a SNAPSHOT revision
3. the stable version must not already be tagged

``release_publish`` runs the readiness task and, when it passes, queues the
configured publish steps ahead of anything already pending.
"""

from __future__ import annotations

import fnmatch

from relkit.core.config import TagMatch
from relkit.core.result import Err, Ok, Result
from relkit.git.repository import Repository
from relkit.output.console import ConsoleProtocol, Style
from relkit.services.errors import ReleaseError
from relkit.services.project import ProjectState
from relkit.services.runner import CommandRunner, CommandSpec, RunnerState

__all__ = [
    "READY_TASK",
    "RELEASE_COMMANDS",
    "is_release_ready",
    "missing_ready_task",
    "release_publish",
    "release_ready_task",
    "tag_exists",
]

READY_TASK = "releaseReady"


def tag_exists(tag_list: str, version: str, tag_glob: str, mode: TagMatch = "exact") -> bool:
    """Check whether ``version`` is already tagged.

    ``tag_list`` is the output of ``git tag -l <tag_glob>``. ``substring`` looks
    for ``version`` anywhere in that output, so a ``v1.2.30`` tag also blocks
    ``1.2.3``. ``exact`` requires a listed tag name that matches ``tag_glob`` as a
    whole and ends with the version.
    """
    if mode == "substring":
        return version in tag_list

    for line in tag_list.splitlines():
        tag = line.strip()
        if tag.endswith(version) and fnmatch.fnmatchcase(tag, tag_glob):
            return True
    return False


def is_release_ready(
    project: ProjectState,
    repo: Repository,
    console: ConsoleProtocol,
) -> Result[bool, ReleaseError]:
    """Decide whether the project can be released.

    Returns:
        Ok(True/False) for a decision, Err(ReleaseError) if git could not
        answer the tag query.
    """
    stable = project.stable_version
    if stable is None:
        console.error(f"No version declaration found in {project.root}")
        return Ok(False)

    if not repo.is_clean():
        console.error("Working directory is not clean.")
        return Ok(False)

    snapshots = project.snapshot_dependencies
    if snapshots:
        console.error("Build has snapshot dependencies.")
        for dep in snapshots:
            console.print(f"  {dep}", Style.DIM)
        return Ok(False)

    settings = project.config.release
    tag_glob = settings.tag_list_pattern.format(version=stable)
    tags = repo.list_tags(tag_glob)
    if isinstance(tags, Err):
        return Err(
            ReleaseError(
                kind="git_failed",
                message="failed to list git tags",
                hint=tags.error.message,
            )
        )
    if tag_exists(tags.value, stable, tag_glob, settings.tag_match):
        console.error(f"Cannot tag release version {stable}: tag already exists.")
        return Ok(False)

    console.success("Current project is ok for release.")
    return Ok(True)


def missing_ready_task() -> ReleaseError:
    return ReleaseError(
        kind="missing_task",
        message=f"no {READY_TASK} task defined",
        hint="register a task under this key when building the runner",
    )


def release_ready_task(runner: CommandRunner, state: RunnerState) -> Result[bool, ReleaseError]:
    return is_release_ready(state.project, runner.repository(state), runner.console)


def _release_ready_command(
    runner: CommandRunner, state: RunnerState, args: tuple[str, ...]
) -> RunnerState:
    outcome = runner.run_task(READY_TASK, state)
    if outcome is None:
        return runner.abort(state, missing_ready_task())
    next_state, result = outcome
    match result:
        case Err(error):
            return runner.abort(next_state, error)
        case Ok(ready):
            return next_state if ready else next_state.fail()


def release_publish(
    runner: CommandRunner, state: RunnerState, args: tuple[str, ...] = ()
) -> RunnerState:
    """Check readiness, then queue the publish steps.

    Nothing is queued when the readiness task is missing, fails or answers
    False; the returned state is failed instead.
    """
    outcome = runner.run_task(READY_TASK, state)
    if outcome is None:
        return runner.abort(state, missing_ready_task())

    next_state, result = outcome
    match result:
        case Err(error):
            return runner.abort(next_state, error)
        case Ok(False):
            runner.console.error("Stopping release.")
            return next_state.fail()
        case Ok(_):
            return next_state.prepend(next_state.project.config.release.tasks)


RELEASE_COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(
        name=READY_TASK,
        help="Check that the source tree and project can be published",
        handler=_release_ready_command,
    ),
    CommandSpec(
        name="releasePublish",
        help="Publish and tag a release by removing SNAPSHOT from the version and bumping",
        handler=release_publish,
    ),
)

"""Commands that change the project's declared version.

Each command applies a transition to the current version, rewrites the
declaration in the first existing descriptor file, then reloads the project
so later steps in the same run see the new version.
"""

from __future__ import annotations

from collections.abc import Callable

from relkit.output.console import Style
from relkit.services.descriptor import write_new_version
from relkit.services.errors import ReleaseError
from relkit.services.runner import CommandRunner, CommandSpec, Handler, RunnerState
from relkit.version import Version, parse_version

__all__ = ["VERSION_COMMANDS", "Transition", "change_version"]

Transition = Callable[[Version], Version | None]


def change_version(runner: CommandRunner, state: RunnerState, transition: Transition) -> RunnerState:
    """Apply ``transition`` to the current version and persist the result.

    A transition returning None (numeric bump of a freeform version) is a
    warning, not a failure: nothing is written and no reload happens. A
    version declared outside the file that would be rewritten fails the
    step.
    """
    console = runner.console
    project = state.project
    if project.version is None:
        return runner.abort(
            state,
            ReleaseError(
                kind="missing_version",
                message=f"No version declaration found in {project.root}",
            ),
        )
    if project.declared_in is not None and project.declared_in != project.version_file:
        return runner.abort(
            state,
            ReleaseError(
                kind="missing_version",
                message=(
                    f"Version {project.version} is declared in {project.declared_in}, "
                    f"but the first descriptor file is {project.version_file}"
                ),
                hint="point [descriptors] dir or glob in relkit.toml past files without a version",
            ),
        )

    current = parse_version(project.version)
    target = transition(current)
    if target is None:
        console.warning(f"Version {current} is not a semantic version, cannot change")
        return state

    if project.version_file is not None:
        console.info(f"Setting version {target} in file {project.version_file}")
        written = write_new_version(
            project.version_file,
            project.config.version.compiled(),
            str(current),
            str(target),
        )
        if not written:
            console.print(f"no declaration of {current} rewritten", Style.DIM)

    return runner.reload(state)


def _transition_command(transition: Transition) -> Handler:
    def handler(runner: CommandRunner, state: RunnerState, args: tuple[str, ...]) -> RunnerState:
        return change_version(runner, state, transition)

    return handler


def _version_set(runner: CommandRunner, state: RunnerState, args: tuple[str, ...]) -> RunnerState:
    target = parse_version(args[0])
    return change_version(runner, state, lambda _: target)


VERSION_COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(
        name="versionBumpMajor",
        help="Bump the major version number (for example, 2.1.4 -> 3.0.0)",
        handler=_transition_command(lambda v: v.inc_major()),
    ),
    CommandSpec(
        name="versionBumpMinor",
        help="Bump the minor version number (for example, 2.1.4 -> 2.2.0)",
        handler=_transition_command(lambda v: v.inc_minor()),
    ),
    CommandSpec(
        name="versionBumpPatch",
        help="Bump the patch version number (for example, 2.1.4 -> 2.1.5)",
        handler=_transition_command(lambda v: v.inc_patch()),
    ),
    CommandSpec(
        name="versionToSnapshot",
        help="Convert the current version into a snapshot (for example, 2.1.4 -> 2.1.4-SNAPSHOT)",
        handler=_transition_command(lambda v: v.to_snapshot()),
    ),
    CommandSpec(
        name="versionToStable",
        help="Convert the current version into a stable release (for example, 2.1.4-SNAPSHOT -> 2.1.4)",
        handler=_transition_command(lambda v: v.strip_snapshot()),
    ),
    CommandSpec(
        name="versionSet",
        help="Manually set the current version",
        handler=_version_set,
        arity=1,
    ),
)

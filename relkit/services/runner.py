"""Command runner: pending-step queue, named tasks and the reload primitive.

Steps are queued by name (``"versionBumpPatch"``) or name plus arguments
(``"versionSet 2.0.0"``). The runner executes one step at a time to
completion. Every step receives the current RunnerState and returns a new
one; state is never mutated in place.

Usage:
    runner = default_runner(console)
    state = RunnerState(project=project, remaining=("releasePublish",))
    final = runner.run(state)
    if final.failed:
        ...
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from relkit.core.result import Err, Result
from relkit.git.repository import Repository
from relkit.output.console import ConsoleProtocol, Style
from relkit.output.errors import print_release_error
from relkit.services.errors import ReleaseError
from relkit.services.project import ProjectState, load_project

__all__ = [
    "CommandRunner",
    "CommandSpec",
    "Handler",
    "RunnerState",
    "Task",
    "TaskOutcome",
]


@dataclass(frozen=True, slots=True)
class RunnerState:
    project: ProjectState
    remaining: tuple[str, ...] = ()
    completed: tuple[str, ...] = ()
    failed: bool = False
    error: ReleaseError | None = None

    def fail(self, error: ReleaseError | None = None) -> RunnerState:
        """Mark the run failed, keeping the first error recorded."""
        return replace(self, failed=True, error=self.error or error)

    def prepend(self, steps: Iterable[str]) -> RunnerState:
        """Queue ``steps`` ahead of whatever is already pending."""
        return replace(self, remaining=(*steps, *self.remaining))


Handler = Callable[["CommandRunner", RunnerState, tuple[str, ...]], RunnerState]
Task = Callable[["CommandRunner", RunnerState], Result[bool, ReleaseError]]
TaskOutcome = tuple[RunnerState, Result[bool, ReleaseError]]


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """A queueable step.

    Attributes:
        name: Step name used in the queue
        help: One-line description
        handler: Function producing the next state
        arity: Number of arguments the step takes
    """

    name: str
    help: str
    handler: Handler
    arity: int = 0


class CommandRunner:
    def __init__(
        self,
        *,
        commands: Mapping[str, CommandSpec],
        tasks: Mapping[str, Task],
        console: ConsoleProtocol,
        repo_factory: Callable[[Path], Repository] = Repository,
    ) -> None:
        self._commands = dict(commands)
        self._tasks = dict(tasks)
        self._repo_factory = repo_factory
        self.console = console

    @property
    def commands(self) -> Mapping[str, CommandSpec]:
        return self._commands

    def repository(self, state: RunnerState) -> Repository:
        return self._repo_factory(state.project.root)

    def run_task(self, key: str, state: RunnerState) -> TaskOutcome | None:
        """Evaluate a named task.

        Returns:
            None if no task is registered under ``key``, otherwise the
            state after evaluation and the task result.
        """
        task = self._tasks.get(key)
        if task is None:
            return None
        return (state, task(self, state))

    def run(self, state: RunnerState) -> RunnerState:
        """Process pending steps until the queue is empty or a step fails."""
        current = state
        while current.remaining and not current.failed:
            step = current.remaining[0]
            current = replace(current, remaining=current.remaining[1:])

            name, args = _split_step(step)
            spec = self._commands.get(name)
            if spec is None:
                return self.abort(
                    current,
                    ReleaseError(
                        kind="unknown_step",
                        message=f"Not a valid command: {name}",
                        hint="relkit run lists the available steps",
                    ),
                )
            if len(args) != spec.arity:
                return self.abort(
                    current,
                    ReleaseError(
                        kind="invalid_input",
                        message=f"{name} expects {spec.arity} argument(s), got {len(args)}",
                    ),
                )

            self.console.print(f"> {step}", Style.DIM)
            current = spec.handler(self, current, args)
            if not current.failed:
                current = replace(current, completed=(*current.completed, step))
        return current

    def reload(self, state: RunnerState) -> RunnerState:
        """Re-derive the project state from the files on disk."""
        result = load_project(state.project.root)
        if isinstance(result, Err):
            hint = str(result.error.path) if result.error.path is not None else None
            return self.abort(
                state,
                ReleaseError(kind="config_invalid", message=result.error.message, hint=hint),
            )
        return replace(state, project=result.value)

    def abort(self, state: RunnerState, error: ReleaseError) -> RunnerState:
        """Report ``error`` and return the failed state carrying it."""
        print_release_error(error, self.console)
        return state.fail(error)


def _split_step(step: str) -> tuple[str, tuple[str, ...]]:
    parts = step.split()
    if not parts:
        return ("", ())
    return (parts[0], tuple(parts[1:]))

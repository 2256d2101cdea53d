"""Built-in steps and tasks."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from relkit.git.repository import Repository
from relkit.output.console import ConsoleProtocol
from relkit.services.release import READY_TASK, RELEASE_COMMANDS, release_ready_task
from relkit.services.runner import CommandRunner, CommandSpec, Task
from relkit.services.steps import STEP_COMMANDS
from relkit.services.versioning import VERSION_COMMANDS

__all__ = ["builtin_commands", "builtin_tasks", "default_runner"]


def builtin_commands() -> dict[str, CommandSpec]:
    specs = (*RELEASE_COMMANDS, *VERSION_COMMANDS, *STEP_COMMANDS)
    return {spec.name: spec for spec in specs}


def builtin_tasks() -> dict[str, Task]:
    return {READY_TASK: release_ready_task}


def default_runner(
    console: ConsoleProtocol,
    *,
    repo_factory: Callable[[Path], Repository] = Repository,
) -> CommandRunner:
    return CommandRunner(
        commands=builtin_commands(),
        tasks=builtin_tasks(),
        console=console,
        repo_factory=repo_factory,
    )

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from relkit.core.errors import ErrorCode
from relkit.core.result import Err
from relkit.output.console import ConsoleProtocol, RichConsole
from relkit.output.errors import print_release_error, release_error_exit_code
from relkit.services.errors import ReleaseError
from relkit.services.project import ProjectState, find_project_root, load_project
from relkit.services.registry import default_runner
from relkit.services.runner import CommandRunner

ENV_PROJECT_ROOT = "RELKIT_PROJECT_ROOT"


@dataclass(frozen=True, slots=True)
class CLIContext:
    project: ProjectState
    console: ConsoleProtocol
    runner: CommandRunner


def project_root() -> Path:
    env = os.environ.get(ENV_PROJECT_ROOT)
    if env:
        return Path(env)
    return find_project_root(Path.cwd())


def build_context() -> CLIContext:
    root = project_root()
    try:
        result = load_project(root)
    except OSError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.IO_ERROR))

    console = RichConsole()
    if isinstance(result, Err):
        path = result.error.path
        error = ReleaseError(
            kind="config_invalid",
            message=result.error.message,
            hint=str(path) if path is not None else None,
        )
        print_release_error(error, console)
        raise typer.Exit(code=release_error_exit_code(error))

    return CLIContext(
        project=result.value,
        console=console,
        runner=default_runner(console),
    )

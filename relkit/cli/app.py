from __future__ import annotations

import os
from pathlib import Path

import typer

from relkit import __version__
from relkit.cli.commands.project_cmd import run, show
from relkit.cli.commands.release_cmd import publish, ready
from relkit.cli.commands.version_cmd import (
    bump_major,
    bump_minor,
    bump_patch,
    set_version,
    to_snapshot,
    to_stable,
)
from relkit.cli.context import ENV_PROJECT_ROOT
from relkit.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Release
app.command()(ready)
app.command()(publish)

# Version
app.command("bump-major")(bump_major)
app.command("bump-minor")(bump_minor)
app.command("bump-patch")(bump_patch)
app.command("to-snapshot")(to_snapshot)
app.command("to-stable")(to_stable)
app.command("set-version")(set_version)

# Project
app.command()(show)
app.command()(run)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    project: Path | None = typer.Option(
        None,
        "--project",
        help="Project root (overrides detection from the current directory)",
    ),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if project is not None:
        try:
            root = project.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --project: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        if not root.is_dir():
            typer.echo(f"error: --project '{root}' is not a directory", err=True)
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

        os.environ[ENV_PROJECT_ROOT] = str(root)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


def main() -> None:
    app()

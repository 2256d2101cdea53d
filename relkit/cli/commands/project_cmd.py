from __future__ import annotations

import typer

from relkit.cli.commands._helpers import print_version, run_steps
from relkit.cli.context import build_context
from relkit.output.console import Style


def show() -> None:
    """Show the current version, its descriptor file and dependencies."""
    ctx = build_context()
    project = ctx.project
    ctx.console.print(f"project: {project.root}", Style.DIM)
    ctx.console.print(f"version: {project.version or '(none)'}")
    if project.declared_in is not None:
        ctx.console.print(f"declared in: {project.declared_in}", Style.DIM)
    if project.version_file is not None and project.version_file != project.declared_in:
        ctx.console.print(f"rewrites go to: {project.version_file}", Style.WARNING)

    ctx.console.header("Dependencies")
    if not project.dependencies:
        ctx.console.print("(none)", Style.DIM)
    for dep in project.dependencies:
        style = Style.WARNING if dep.is_snapshot else Style.DEFAULT
        ctx.console.print(str(dep), style)


def run(
    steps: list[str] | None = typer.Argument(
        None, help="Steps to run in order, e.g. versionBumpMinor 'versionSet 2.0.0'"
    ),
) -> None:
    """Run release steps by name. Without arguments, list them."""
    ctx = build_context()
    if not steps:
        ctx.console.header("Steps")
        for spec in ctx.runner.commands.values():
            ctx.console.print(f"{spec.name}: {spec.help}")
        return

    final = run_steps(ctx, steps)
    print_version(ctx, final)

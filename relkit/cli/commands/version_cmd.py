from __future__ import annotations

import typer

from relkit.cli.commands._helpers import exit_with_code, print_version, run_steps
from relkit.cli.context import build_context
from relkit.output.console import RichConsole
from relkit.output.errors import print_release_error, release_error_exit_code
from relkit.services.errors import ReleaseError


def _change(step: str) -> None:
    ctx = build_context()
    final = run_steps(ctx, [step])
    print_version(ctx, final)


def bump_major() -> None:
    """Bump the major version number (for example, 2.1.4 -> 3.0.0)."""
    _change("versionBumpMajor")


def bump_minor() -> None:
    """Bump the minor version number (for example, 2.1.4 -> 2.2.0)."""
    _change("versionBumpMinor")


def bump_patch() -> None:
    """Bump the patch version number (for example, 2.1.4 -> 2.1.5)."""
    _change("versionBumpPatch")


def to_snapshot() -> None:
    """Convert the current version into a snapshot (2.1.4 -> 2.1.4-SNAPSHOT)."""
    _change("versionToSnapshot")


def to_stable() -> None:
    """Convert the current version into a stable release (2.1.4-SNAPSHOT -> 2.1.4)."""
    _change("versionToStable")


def set_version(version: str = typer.Argument(..., help="New version, e.g. 3.0.0-SNAPSHOT")) -> None:
    """Manually set the current version."""
    value = version.strip()
    if not value or any(ch.isspace() for ch in value):
        error = ReleaseError(
            kind="invalid_input",
            message=f"invalid version: {version!r}",
            hint="a version is a single word, e.g. 3.0.0 or 3.0.0-SNAPSHOT",
        )
        print_release_error(error, RichConsole())
        exit_with_code(release_error_exit_code(error))
    _change(f"versionSet {value}")

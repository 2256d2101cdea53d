"""Running external commands.

Git queries go through ``run``, which captures stdout. Publish commands go
through ``run_streaming`` so the build tool's own output reaches the
terminal. Neither raises on a failing command:

    match run(["git", "tag", "-l"], cwd=root):
        case Ok(stdout):
            ...
        case Err(error):
            console.error(str(error))
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from relkit.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run", "run_streaming"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that exited non-zero, timed out or could not start.

    Attributes:
        command: argv as executed
        returncode: exit status, -1 when the process never completed
        stdout: captured output (empty when streaming)
        stderr: captured error output, or the reason the command did not run
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    def __str__(self) -> str:
        shown = " ".join(self.command[:3])
        if len(self.command) > 3:
            shown += " ..."
        return f"{shown} failed (exit {self.returncode})"


def run(cmd: list[str], cwd: Path, *, timeout: float | None = None) -> Result[str, ProcessError]:
    """Run ``cmd`` in ``cwd`` and return its stdout."""
    return _execute(cmd, cwd, capture=True, timeout=timeout)


def run_streaming(cmd: list[str], cwd: Path) -> Result[None, ProcessError]:
    """Run ``cmd`` in ``cwd`` with stdout and stderr left attached."""
    return _execute(cmd, cwd, capture=False, timeout=None).map(lambda _: None)


def _execute(
    cmd: list[str], cwd: Path, *, capture: bool, timeout: float | None
) -> Result[str, ProcessError]:
    argv = tuple(cmd)
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            capture_output=capture,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(ProcessError(argv, -1, stderr=f"Command timed out after {timeout}s"))
    except OSError as e:
        return Err(ProcessError(argv, -1, stderr=str(e)))

    stdout = proc.stdout or ""
    if proc.returncode != 0:
        return Err(ProcessError(argv, proc.returncode, stdout=stdout, stderr=proc.stderr or ""))
    return Ok(stdout)

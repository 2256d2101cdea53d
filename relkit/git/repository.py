"""Git repository abstraction.

Only the operations the release workflow needs: working tree cleanliness,
tag listing, commit and tag. Everything that can fail returns a Result.

Usage:
    repo = Repository(Path("/path/to/project"))

    if not repo.is_clean():
        print("dirty")

    match repo.list_tags("*version?1.2.3"):
        case Ok(tags):
            print(tags)
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.platform.process import ProcessError
from relkit.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

__all__ = ["GitError", "Repository"]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """Git repository rooted at (or above) ``path``.

    Attributes:
        path: Directory git commands run in
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def is_clean(self) -> bool:
        """Check if working tree is clean (no changes, no untracked files).

        Returns False if status cannot be determined.
        """
        result = self._run(["status", "--porcelain"])
        match result:
            case Ok(stdout):
                return stdout.strip() == ""
            case Err(_):
                return False

    def list_tags(self, pattern: str) -> Result[str, GitError]:
        """List tags matching a glob pattern.

        Returns:
            Ok(newline-joined tag names, stripped) on success
            Err(GitError) on failure
        """
        result = self._run(["tag", "-l", pattern])
        match result:
            case Err(e):
                return Err(_git_error("tag -l", e, "git tag -l failed"))
            case Ok(stdout):
                return Ok(stdout.strip())

    def commit(self, message: str) -> Result[str, GitError]:
        """Commit all tracked changes (``git commit -a``)."""
        result = self._run(["commit", "-a", "-m", message])
        match result:
            case Err(e):
                return Err(_git_error("commit", e, "git commit failed"))
            case Ok(stdout):
                return Ok(stdout.strip())

    def tag(self, name: str, message: str) -> Result[None, GitError]:
        """Create an annotated tag on HEAD."""
        result = self._run(["tag", "-a", name, "-m", message])
        match result:
            case Err(e):
                return Err(_git_error("tag", e, f"git tag {name} failed"))
            case Ok(_):
                return Ok(None)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return run_process(
            ["git", "-C", str(self.path), *args], cwd=self.path, timeout=_GIT_TIMEOUT_SECONDS
        )


def _git_error(command: str, e: ProcessError, fallback: str) -> GitError:
    return GitError(
        command=command,
        message=e.stderr.strip() or e.stdout.strip() or fallback,
        returncode=e.returncode,
    )

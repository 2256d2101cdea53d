"""Git operations used by the release workflow."""

from relkit.git.repository import GitError, Repository

__all__ = ["GitError", "Repository"]

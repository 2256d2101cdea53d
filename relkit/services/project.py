"""Project state as read from disk.

A ProjectState is an immutable snapshot: config, current version and
declared dependencies. Mutation steps never edit it; they rewrite files and
call ``load_project`` again (the reload primitive).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relkit.core.config import CONFIG_FILE_NAME, ConfigError, ReleaseConfig, load_config_or_default
from relkit.core.result import Err, Ok, Result
from relkit.services.dependencies import Dependency, resolve_dependencies
from relkit.services.descriptor import (
    candidate_files,
    find_declared_version,
    find_version_file,
)
from relkit.version import strip_snapshot_suffix

__all__ = ["ProjectState", "find_project_root", "load_project"]


@dataclass(frozen=True, slots=True)
class ProjectState:
    root: Path
    config: ReleaseConfig
    version: str | None
    version_file: Path | None
    dependencies: tuple[Dependency, ...] = ()
    declared_in: Path | None = None

    @property
    def stable_version(self) -> str | None:
        """Current version without its snapshot marker."""
        if self.version is None:
            return None
        return strip_snapshot_suffix(self.version)

    @property
    def snapshot_dependencies(self) -> list[Dependency]:
        return [d for d in self.dependencies if d.is_snapshot]


def find_project_root(start: Path) -> Path:
    """Nearest directory at or above ``start`` holding a relkit.toml.

    Falls back to ``start`` itself when no config file is found.
    """
    start = start.resolve()
    for parent in (start, *start.parents):
        if (parent / CONFIG_FILE_NAME).is_file():
            return parent
    return start


def load_project(root: Path) -> Result[ProjectState, ConfigError]:
    """Read config, version declaration and dependencies for ``root``.

    Descriptor read errors propagate as OSError.
    """
    config_result = load_config_or_default(root)
    if isinstance(config_result, Err):
        return config_result
    config = config_result.value

    # version_file is where rewrites go; the version itself may be declared
    # further down the candidate list
    version_file = find_version_file(root, config.descriptors)
    declared = find_declared_version(root, config.descriptors, config.version.compiled())
    version, declared_in = declared if declared is not None else (None, None)

    return Ok(
        ProjectState(
            root=root,
            config=config,
            version=version,
            version_file=version_file,
            dependencies=resolve_dependencies(candidate_files(root, config.descriptors)),
            declared_in=declared_in,
        )
    )

"""Typed configuration loading and access.

This module provides dataclasses for the ``relkit.toml`` structure. Every
field has a default so a project without a config file behaves like a
plain sbt-style build (``version := "..."`` in ``build.sbt``).
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_PUBLISH_TASKS",
    "DEFAULT_VERSION_PATTERNS",
    "ConfigError",
    "DescriptorConfig",
    "ReleaseConfig",
    "ReleaseSettings",
    "TagMatch",
    "VersionConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = "relkit.toml"

# Very crude, but projects with fancier version settings override this.
DEFAULT_VERSION_PATTERNS: tuple[str, ...] = (r'\bversion\s+:=\s*("(.*?)")',)

DEFAULT_PUBLISH_TASKS: tuple[str, ...] = (
    "releaseReady",
    "versionToStable",
    "publishLocal",
    "publish",
    "gitCommit",
    "gitTag",
    "versionBumpPatch",
    "versionToSnapshot",
    "gitCommit",
)

TagMatch = Literal["exact", "substring"]


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class VersionConfig:
    """Patterns identifying a version declaration line."""

    patterns: tuple[str, ...] = DEFAULT_VERSION_PATTERNS

    def compiled(self) -> tuple[re.Pattern[str], ...]:
        return tuple(re.compile(p) for p in self.patterns)


@dataclass(frozen=True, slots=True)
class DescriptorConfig:
    """Where descriptor files holding the version declaration live.

    Candidates are searched in order: ``dir/**/glob`` (sorted), then
    ``<root>/build_file``, then ``<root>/../build_file``.
    """

    dir: str = "project"
    glob: str = "*.scala"
    build_file: str = "build.sbt"


@dataclass(frozen=True, slots=True)
class ReleaseSettings:
    """Publish sequence and git conventions."""

    tasks: tuple[str, ...] = DEFAULT_PUBLISH_TASKS
    tag_format: str = "version-{version}"
    tag_list_pattern: str = "*version?{version}"
    tag_match: TagMatch = "exact"
    commit_message: str = "Setting version to {version}"
    publish_local: tuple[str, ...] = ("sbt", "publishLocal")
    publish: tuple[str, ...] = ("sbt", "publish")


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Main configuration container."""

    version: VersionConfig = field(default_factory=VersionConfig)
    descriptors: DescriptorConfig = field(default_factory=DescriptorConfig)
    release: ReleaseSettings = field(default_factory=ReleaseSettings)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ReleaseConfig:
        """Create a ReleaseConfig from a mapping (parsed TOML).

        Raises:
            TypeError: On wrongly typed values.
            ValueError: On invalid values (bad regex, unknown tag_match).
        """
        version: StrDict = get_table(data, "version") or {}
        descriptors: StrDict = get_table(data, "descriptors") or {}
        release: StrDict = get_table(data, "release") or {}

        patterns = get_str_list(version, "patterns")
        if patterns is not None:
            for pattern in patterns:
                try:
                    re.compile(pattern)
                except re.error as e:
                    raise ValueError(f"invalid version pattern {pattern!r}: {e}") from e

        tag_match = get_str(release, "tag_match") or "exact"
        if tag_match not in ("exact", "substring"):
            raise ValueError(f"tag_match must be 'exact' or 'substring', got {tag_match!r}")

        tasks = get_str_list(release, "tasks")
        if tasks is not None and not tasks:
            raise ValueError("release.tasks must list at least one step")

        defaults = ReleaseSettings()
        publish_local = get_str_list(release, "publish_local")
        publish = get_str_list(release, "publish")

        return cls(
            version=VersionConfig(
                patterns=patterns if patterns is not None else DEFAULT_VERSION_PATTERNS,
            ),
            descriptors=DescriptorConfig(
                dir=get_str(descriptors, "dir") or "project",
                glob=get_str(descriptors, "glob") or "*.scala",
                build_file=get_str(descriptors, "build_file") or "build.sbt",
            ),
            release=ReleaseSettings(
                tasks=tasks if tasks is not None else DEFAULT_PUBLISH_TASKS,
                tag_format=get_str(release, "tag_format") or defaults.tag_format,
                tag_list_pattern=get_str(release, "tag_list_pattern") or defaults.tag_list_pattern,
                tag_match="substring" if tag_match == "substring" else "exact",
                commit_message=get_str(release, "commit_message") or defaults.commit_message,
                publish_local=publish_local if publish_local is not None else defaults.publish_local,
                publish=publish if publish is not None else defaults.publish,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to relkit.toml

    Returns:
        Ok(ReleaseConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(ReleaseConfig.from_dict(result.value))
    except (TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(root: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load ``<root>/relkit.toml``, or the default config if there is none.

    A present but broken config file is still an error.
    """
    path = root / CONFIG_FILE_NAME
    if not path.exists():
        return Ok(ReleaseConfig())
    return load_config(path)

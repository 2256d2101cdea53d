"""Algebraic version type.

A version is either semantic (``major.minor.patch[.label]``) or a freeform
string. Both carry a snapshot flag rendered as a ``-SNAPSHOT`` suffix.

Parsing never fails: anything that is not three or four dotted components
with numeric major/minor/patch degrades to a RawVersion.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

__all__ = [
    "RawVersion",
    "SemanticVersion",
    "Version",
    "is_snapshot",
    "parse_version",
    "render",
    "strip_snapshot_suffix",
]

SNAPSHOT_SUFFIX = "-SNAPSHOT"

_SNAPSHOT_RE = re.compile(r"-?SNAPSHOT\Z")
_NUMBER_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True, slots=True)
class SemanticVersion:
    major: int
    minor: int
    patch: int
    label: str | None = None
    snapshot: bool = False

    def inc_patch(self) -> SemanticVersion:
        return replace(self, patch=self.patch + 1)

    def inc_minor(self) -> SemanticVersion:
        return replace(self, minor=self.minor + 1, patch=0)

    def inc_major(self) -> SemanticVersion:
        return replace(self, major=self.major + 1, minor=0, patch=0)

    def to_snapshot(self) -> SemanticVersion:
        return replace(self, snapshot=True)

    def strip_snapshot(self) -> SemanticVersion:
        return replace(self, snapshot=False)

    def __str__(self) -> str:
        label = f".{self.label}" if self.label is not None else ""
        suffix = SNAPSHOT_SUFFIX if self.snapshot else ""
        return f"{self.major}.{self.minor}.{self.patch}{label}{suffix}"


@dataclass(frozen=True, slots=True)
class RawVersion:
    """Freeform version. ``text`` never includes the snapshot suffix."""

    text: str
    snapshot: bool = False

    # Numeric bumps are undefined for freeform versions.
    def inc_patch(self) -> None:
        return None

    def inc_minor(self) -> None:
        return None

    def inc_major(self) -> None:
        return None

    def to_snapshot(self) -> RawVersion:
        return replace(self, snapshot=True)

    def strip_snapshot(self) -> RawVersion:
        return replace(self, snapshot=False)

    def __str__(self) -> str:
        if self.snapshot:
            return f"{self.text}{SNAPSHOT_SUFFIX}"
        return self.text


type Version = SemanticVersion | RawVersion


def is_snapshot(text: str) -> bool:
    """True if ``text`` ends with ``SNAPSHOT`` (with or without a leading ``-``)."""
    return text.endswith("SNAPSHOT")


def strip_snapshot_suffix(text: str) -> str:
    """Remove a trailing ``-SNAPSHOT`` or ``SNAPSHOT`` marker."""
    return _SNAPSHOT_RE.sub("", text, count=1)


def parse_version(text: str) -> Version:
    """Parse a version string.

    Examples:
        >>> parse_version("2.1.4-SNAPSHOT")
        SemanticVersion(major=2, minor=1, patch=4, label=None, snapshot=True)
        >>> parse_version("2.1.4.rc1")
        SemanticVersion(major=2, minor=1, patch=4, label='rc1', snapshot=False)
        >>> parse_version("foo-bar")
        RawVersion(text='foo-bar', snapshot=False)
    """
    snapshot = is_snapshot(text)
    stripped = strip_snapshot_suffix(text)
    parts = stripped.split(".")

    if len(parts) in (3, 4) and all(_NUMBER_RE.fullmatch(p) for p in parts[:3]):
        major, minor, patch = (int(p) for p in parts[:3])
        if len(parts) == 3:
            return SemanticVersion(major, minor, patch, None, snapshot)
        if parts[3]:
            return SemanticVersion(major, minor, patch, parts[3], snapshot)

    return RawVersion(stripped, snapshot)


def render(version: Version) -> str:
    """Render a version back to its string form (inverse of parse_version)."""
    return str(version)

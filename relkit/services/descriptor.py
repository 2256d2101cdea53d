"""Descriptor files: locating, reading and rewriting the version declaration.

Only the first existing candidate file is ever read or written; there is
no merging across files.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path

from relkit.core.config import DescriptorConfig
from relkit.platform.files import replace_lines

__all__ = [
    "candidate_files",
    "find_declared_version",
    "find_version_file",
    "read_version",
    "rewrite_version_lines",
    "write_new_version",
]


def candidate_files(root: Path, descriptors: DescriptorConfig) -> list[Path]:
    """All candidate descriptor paths in search order (existing or not)."""
    project_dir = root / descriptors.dir
    scanned: list[Path] = []
    if project_dir.is_dir():
        scanned = sorted(p for p in project_dir.rglob(descriptors.glob) if p.is_file())
    return [
        *scanned,
        root / descriptors.build_file,
        root.parent / descriptors.build_file,
    ]


def find_version_file(root: Path, descriptors: DescriptorConfig) -> Path | None:
    """First existing candidate file, or None."""
    for path in candidate_files(root, descriptors):
        if path.is_file():
            return path
    return None


def find_declared_version(
    root: Path, descriptors: DescriptorConfig, patterns: Sequence[re.Pattern[str]]
) -> tuple[str, Path] | None:
    """Version and file of the first candidate that declares a version.

    Candidates without a declaration (an sbt ``project/Dependencies.scala``
    next to the ``build.sbt`` holding ``version :=``) are skipped.
    """
    for path in candidate_files(root, descriptors):
        if not path.is_file():
            continue
        version = read_version(path, patterns)
        if version is not None:
            return version, path
    return None


def read_version(path: Path, patterns: Sequence[re.Pattern[str]]) -> str | None:
    """Value of the first version declaration in ``path``.

    The value is the ``version`` named group when the pattern has one,
    otherwise the innermost (highest-numbered) group that matched.
    """
    for line in _read_text(path).splitlines():
        for pattern in patterns:
            m = pattern.search(line)
            if m is None:
                continue
            value = _declared_value(m)
            if value is not None:
                return value
    return None


def rewrite_version_lines(
    lines: Sequence[str],
    patterns: Sequence[re.Pattern[str]],
    old: str,
    new: str,
) -> tuple[list[str], bool]:
    """Replace ``old`` with ``new`` on lines that declare a version.

    A line is rewritten once when it matches at least one pattern and
    contains the literal ``old`` string. Returns the new lines and whether
    any line ended up different.
    """
    changed = False
    out: list[str] = []
    for line in lines:
        if old in line and any(p.search(line) for p in patterns):
            replaced = line.replace(old, new)
            changed = changed or replaced != line
            line = replaced
        out.append(line)
    return out, changed


def write_new_version(
    path: Path,
    patterns: Sequence[re.Pattern[str]],
    old: str,
    new: str,
) -> bool:
    """Rewrite the version declaration in ``path``.

    The file is written only if at least one line changed. I/O errors
    propagate.

    Returns:
        True if the file was written.
    """
    lines = _read_text(path).splitlines(keepends=True)
    new_lines, changed = rewrite_version_lines(lines, patterns, old, new)
    if changed:
        replace_lines(path, new_lines)
    return changed


def _read_text(path: Path) -> str:
    # newline="" keeps CRLF files intact across a rewrite
    with path.open(encoding="utf-8", newline="") as handle:
        return handle.read()


def _declared_value(m: re.Match[str]) -> str | None:
    if "version" in m.re.groupindex:
        return m.group("version")
    for index in range(m.re.groups, 0, -1):
        value = m.group(index)
        if value is not None:
            return value
    return None

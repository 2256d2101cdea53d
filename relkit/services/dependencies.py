"""Declared library dependencies.

Dependencies are read from descriptor files as sbt-style module ids:

    "org.typelevel" %% "cats-core" % "2.10.0"
    "com.example" % "client" % "1.4.0-SNAPSHOT" % "test"

Only the organization, name and revision are kept. Lines commented out
with ``//`` are ignored.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

__all__ = ["Dependency", "parse_dependencies", "resolve_dependencies"]

_MODULE_RE = re.compile(r'"([^"\s]+)"\s*%%?\s*"([^"\s]+)"\s*%\s*"([^"\s]+)"')


@dataclass(frozen=True, slots=True)
class Dependency:
    organization: str
    name: str
    revision: str
    source: Path

    @property
    def is_snapshot(self) -> bool:
        return "SNAPSHOT" in self.revision

    def __str__(self) -> str:
        return f"{self.organization}:{self.name}:{self.revision}"


def parse_dependencies(text: str, source: Path) -> list[Dependency]:
    deps: list[Dependency] = []
    for line in text.splitlines():
        code = line.split("//", 1)[0]
        for m in _MODULE_RE.finditer(code):
            deps.append(
                Dependency(organization=m.group(1), name=m.group(2), revision=m.group(3), source=source)
            )
    return deps


def resolve_dependencies(files: Iterable[Path]) -> tuple[Dependency, ...]:
    """Collect dependencies from every existing file, in file order."""
    deps: list[Dependency] = []
    for path in files:
        if not path.is_file():
            continue
        deps.extend(parse_dependencies(path.read_text(encoding="utf-8"), path))
    return tuple(deps)

"""Version model.

Usage:
    from relkit.version import parse_version

    v = parse_version("2.1.4-SNAPSHOT")
    bumped = v.inc_patch()
    if bumped is not None:
        print(bumped)  # 2.1.5-SNAPSHOT
"""

from relkit.version.model import (
    RawVersion,
    SemanticVersion,
    Version,
    is_snapshot,
    parse_version,
    render,
    strip_snapshot_suffix,
)

__all__ = [
    "RawVersion",
    "SemanticVersion",
    "Version",
    "is_snapshot",
    "parse_version",
    "render",
    "strip_snapshot_suffix",
]

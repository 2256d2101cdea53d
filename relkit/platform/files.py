"""Descriptor file replacement."""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Iterable
from pathlib import Path

__all__ = ["replace_lines"]


def replace_lines(path: Path, lines: Iterable[str], *, encoding: str = "utf-8") -> None:
    """Replace the contents of an existing file with ``lines``.

    Lines are written as given (keep their own line endings). The new
    content goes to a sibling temp file that takes over the original's
    permission bits before being renamed into place, so readers never see a
    half-written descriptor.

    Raises:
        OSError: If ``path`` does not exist or cannot be replaced.
    """
    mode = stat.S_IMODE(path.stat().st_mode)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.writelines(lines)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    finally:
        tmp_path.unlink(missing_ok=True)

"""Tests for relkit.platform.files."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from relkit.platform.files import replace_lines


def test_replaces_content(tmp_path: Path) -> None:
    path = tmp_path / "build.sbt"
    path.write_text('version := "1.0.0"\n', encoding="utf-8")

    replace_lines(path, ['version := "1.0.1"\r\n', "// end\n"])

    assert path.read_bytes() == b'version := "1.0.1"\r\n// end\n'
    assert [p.name for p in tmp_path.iterdir()] == ["build.sbt"]


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_keeps_permission_bits(tmp_path: Path) -> None:
    path = tmp_path / "version.sh"
    path.write_text("VERSION=1\n", encoding="utf-8")
    path.chmod(0o755)

    replace_lines(path, ["VERSION=2\n"])

    assert stat.S_IMODE(path.stat().st_mode) == 0o755


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        replace_lines(tmp_path / "missing.sbt", ["x\n"])

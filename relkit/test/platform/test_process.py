"""Tests for relkit.platform.process."""

from __future__ import annotations

import sys
from pathlib import Path

from relkit.core.result import Err, Ok
from relkit.platform.process import ProcessError, run, run_streaming


def test_run_captures_stdout(tmp_path: Path) -> None:
    result = run([sys.executable, "-c", "print('hello')"], cwd=tmp_path)
    assert result == Ok("hello\n")


def test_run_nonzero_exit(tmp_path: Path) -> None:
    result = run(
        [sys.executable, "-c", "import sys; sys.stderr.write('bad'); sys.exit(3)"], cwd=tmp_path
    )

    assert isinstance(result, Err)
    assert result.error.returncode == 3
    assert result.error.stderr == "bad"


def test_run_missing_executable(tmp_path: Path) -> None:
    result = run(["relkit-no-such-binary"], cwd=tmp_path)

    assert isinstance(result, Err)
    assert result.error.returncode == -1


def test_run_timeout(tmp_path: Path) -> None:
    result = run([sys.executable, "-c", "import time; time.sleep(5)"], cwd=tmp_path, timeout=0.2)

    assert isinstance(result, Err)
    assert "timed out" in result.error.stderr


def test_run_streaming_exit_codes(tmp_path: Path) -> None:
    assert run_streaming([sys.executable, "-c", "pass"], cwd=tmp_path) == Ok(None)

    result = run_streaming([sys.executable, "-c", "raise SystemExit(2)"], cwd=tmp_path)
    assert isinstance(result, Err)
    assert result.error.returncode == 2


def test_process_error_str() -> None:
    error = ProcessError(command=("sbt", "-batch", "publish", "extra"), returncode=1, stdout="", stderr="")
    assert str(error) == "sbt -batch publish ... failed (exit 1)"

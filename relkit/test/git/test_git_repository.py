"""Tests for relkit.git.repository."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from relkit.core.result import Err, Ok, Result
from relkit.git import repository as repository_mod
from relkit.git.repository import Repository
from relkit.platform.process import ProcessError


class FakeGit:
    def __init__(self, responses: dict[str, Result[str, ProcessError]]) -> None:
        self.responses = responses
        self.calls: list[list[str]] = []

    def __call__(
        self, cmd: list[str], cwd: Path, *, timeout: float | None = None
    ) -> Result[str, ProcessError]:
        self.calls.append(cmd)
        return self.responses.get(cmd[3], Ok(""))


def _failure(stderr: str, returncode: int = 128) -> Err[ProcessError]:
    return Err(ProcessError(command=("git",), returncode=returncode, stdout="", stderr=stderr))


def test_is_clean(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    fake = FakeGit({"status": Ok("")})
    monkeypatch.setattr(repository_mod, "run_process", fake)

    assert Repository(tmp_path).is_clean()
    assert fake.calls == [["git", "-C", str(tmp_path), "status", "--porcelain"]]


def test_is_dirty_with_changes(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(repository_mod, "run_process", FakeGit({"status": Ok(" M build.sbt\n")}))
    assert not Repository(tmp_path).is_clean()


def test_status_failure_is_not_clean(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(
        repository_mod, "run_process", FakeGit({"status": _failure("not a git repository")})
    )
    assert not Repository(tmp_path).is_clean()


def test_list_tags(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    fake = FakeGit({"tag": Ok("version-1.0.0\nversion-1.2.3\n")})
    monkeypatch.setattr(repository_mod, "run_process", fake)

    result = Repository(tmp_path).list_tags("*version?1.2.3")

    assert result == Ok("version-1.0.0\nversion-1.2.3")
    assert fake.calls[0][3:] == ["tag", "-l", "*version?1.2.3"]


def test_list_tags_failure(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(repository_mod, "run_process", FakeGit({"tag": _failure("fatal: boom\n")}))

    result = Repository(tmp_path).list_tags("*")

    assert isinstance(result, Err)
    assert result.error.message == "fatal: boom"
    assert result.error.returncode == 128


def test_commit_and_tag_arguments(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    fake = FakeGit({})
    monkeypatch.setattr(repository_mod, "run_process", fake)
    repo = Repository(tmp_path)

    assert isinstance(repo.commit("Setting version to 1.0.0"), Ok)
    assert repo.tag("version-1.0.0", "Release 1.0.0") == Ok(None)

    assert fake.calls[0][3:] == ["commit", "-a", "-m", "Setting version to 1.0.0"]
    assert fake.calls[1][3:] == ["tag", "-a", "version-1.0.0", "-m", "Release 1.0.0"]


def test_tag_failure_falls_back_to_generic_message(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setattr(repository_mod, "run_process", FakeGit({"tag": _failure("")}))

    result = Repository(tmp_path).tag("v1", "Release 1")

    assert isinstance(result, Err)
    assert result.error.message == "git tag v1 failed"


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
def test_against_real_repository(tmp_path: Path) -> None:
    def git(*args: str) -> None:
        subprocess.run(["git", *args], cwd=tmp_path, check=True, capture_output=True)

    git("init", "-q")
    git("config", "user.email", "dev@example.com")
    git("config", "user.name", "dev")
    git("config", "commit.gpgsign", "false")
    git("config", "tag.gpgsign", "false")
    build = tmp_path / "build.sbt"
    build.write_text('version := "1.0.0"\n', encoding="utf-8")
    git("add", "build.sbt")
    git("commit", "-q", "-m", "init")

    repo = Repository(tmp_path)
    assert repo.is_clean()

    build.write_text('version := "1.0.1"\n', encoding="utf-8")
    assert not repo.is_clean()
    assert isinstance(repo.commit("Setting version to 1.0.1"), Ok)
    assert repo.is_clean()

    assert repo.tag("version-1.0.1", "Release 1.0.1") == Ok(None)
    assert repo.list_tags("*version?1.0.1") == Ok("version-1.0.1")
    assert repo.list_tags("*version?2.0.0") == Ok("")

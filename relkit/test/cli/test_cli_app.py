"""End-to-end tests for the relkit command line."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import Result as CliResult
from typer.testing import CliRunner

from relkit import __version__
from relkit.cli import context as context_mod
from relkit.cli.app import app
from relkit.cli.context import ENV_PROJECT_ROOT
from relkit.core.errors import ErrorCode
from relkit.core.result import Ok, Result
from relkit.git.repository import GitError, Repository
from relkit.output.console import ConsoleProtocol
from relkit.platform.process import ProcessError
from relkit.services import steps as steps_mod
from relkit.services.registry import default_runner
from relkit.services.runner import CommandRunner


class FakeRepo(Repository):
    def __init__(self) -> None:
        super().__init__(Path("."))
        self.clean = True
        self.tags = ""
        self.commits: list[str] = []
        self.created_tags: list[str] = []

    def is_clean(self) -> bool:
        return self.clean

    def list_tags(self, pattern: str) -> Result[str, GitError]:
        return Ok(self.tags)

    def commit(self, message: str) -> Result[str, GitError]:
        self.commits.append(message)
        return Ok("")

    def tag(self, name: str, message: str) -> Result[None, GitError]:
        self.created_tags.append(name)
        return Ok(None)


@pytest.fixture
def repo(monkeypatch: pytest.MonkeyPatch) -> FakeRepo:
    fake = FakeRepo()

    def runner_factory(console: ConsoleProtocol) -> CommandRunner:
        return default_runner(console, repo_factory=lambda _: fake)

    monkeypatch.setattr(context_mod, "default_runner", runner_factory)
    monkeypatch.delenv(ENV_PROJECT_ROOT, raising=False)
    return fake


@pytest.fixture
def published(monkeypatch: pytest.MonkeyPatch) -> list[list[str]]:
    calls: list[list[str]] = []

    def fake_run_streaming(cmd: list[str], cwd: Path) -> Result[None, ProcessError]:
        calls.append(cmd)
        return Ok(None)

    monkeypatch.setattr(steps_mod, "run_streaming", fake_run_streaming)
    return calls


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "demo"
    root.mkdir()
    (root / "build.sbt").write_text(
        'name := "demo"\nversion := "1.2.3-SNAPSHOT"\n'
        'libraryDependencies += "org.example" % "lib" % "0.9.0"\n',
        encoding="utf-8",
    )
    return root


def _invoke(project: Path, *args: str) -> CliResult:
    return CliRunner().invoke(app, ["--project", str(project), *args])


def _version_in(project: Path) -> str:
    return (project / "build.sbt").read_text(encoding="utf-8").splitlines()[1]


def test_version_flag() -> None:
    result = CliRunner().invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_project_must_be_directory(tmp_path: Path, repo: FakeRepo) -> None:
    result = CliRunner().invoke(app, ["--project", str(tmp_path / "missing"), "show"])
    assert result.exit_code == int(ErrorCode.ENV_ERROR)


def test_show(project: Path, repo: FakeRepo) -> None:
    result = _invoke(project, "show")

    assert result.exit_code == 0
    assert "version: 1.2.3-SNAPSHOT" in result.output
    assert "org.example:lib:0.9.0" in result.output


def test_show_flags_split_declaration(project: Path, repo: FakeRepo) -> None:
    (project / "project").mkdir()
    (project / "project" / "Dependencies.scala").write_text("object Dependencies\n", encoding="utf-8")

    result = _invoke(project, "show")

    assert result.exit_code == 0
    assert "version: 1.2.3-SNAPSHOT" in result.output
    assert "declared in:" in result.output
    assert "rewrites go to:" in result.output


def test_bump_refuses_split_declaration(project: Path, repo: FakeRepo) -> None:
    (project / "project").mkdir()
    (project / "project" / "Dependencies.scala").write_text("object Dependencies\n", encoding="utf-8")

    result = _invoke(project, "bump-patch")

    assert result.exit_code == int(ErrorCode.RELEASE_ERROR)
    assert "is declared in" in result.output
    assert _version_in(project) == 'version := "1.2.3-SNAPSHOT"'


def test_ready(project: Path, repo: FakeRepo) -> None:
    result = _invoke(project, "ready")

    assert result.exit_code == 0
    assert "Current project is ok for release." in result.output


def test_ready_dirty(project: Path, repo: FakeRepo) -> None:
    repo.clean = False

    result = _invoke(project, "ready")

    assert result.exit_code == int(ErrorCode.RELEASE_ERROR)
    assert "Working directory is not clean." in result.output


def test_bump_commands(project: Path, repo: FakeRepo) -> None:
    result = _invoke(project, "bump-minor")

    assert result.exit_code == 0
    assert "version: 1.3.0-SNAPSHOT" in result.output
    assert _version_in(project) == 'version := "1.3.0-SNAPSHOT"'

    assert _invoke(project, "to-stable").exit_code == 0
    assert _version_in(project) == 'version := "1.3.0"'

    assert _invoke(project, "bump-major").exit_code == 0
    assert _invoke(project, "to-snapshot").exit_code == 0
    assert _version_in(project) == 'version := "2.0.0-SNAPSHOT"'


def test_set_version(project: Path, repo: FakeRepo) -> None:
    result = _invoke(project, "set-version", "3.0.0")

    assert result.exit_code == 0
    assert _version_in(project) == 'version := "3.0.0"'


def test_set_version_rejects_blank(project: Path, repo: FakeRepo) -> None:
    result = _invoke(project, "set-version", "  ")

    assert result.exit_code == int(ErrorCode.USER_ERROR)
    assert _version_in(project) == 'version := "1.2.3-SNAPSHOT"'


def test_run_lists_steps(project: Path, repo: FakeRepo) -> None:
    result = _invoke(project, "run")

    assert result.exit_code == 0
    assert "releasePublish:" in result.output
    assert "versionSet:" in result.output


def test_run_steps(project: Path, repo: FakeRepo) -> None:
    result = _invoke(project, "run", "versionToStable", "versionBumpPatch")

    assert result.exit_code == 0
    assert _version_in(project) == 'version := "1.2.4"'


def test_run_unknown_step(project: Path, repo: FakeRepo) -> None:
    result = _invoke(project, "run", "versionBumpPatch", "deploy", "versionBumpPatch")

    assert result.exit_code == int(ErrorCode.USER_ERROR)
    assert "Not a valid command: deploy" in result.output
    assert _version_in(project) == 'version := "1.2.4-SNAPSHOT"'


def test_publish(project: Path, repo: FakeRepo, published: list[list[str]]) -> None:
    result = _invoke(project, "publish")

    assert result.exit_code == 0, result.output
    assert published == [["sbt", "publishLocal"], ["sbt", "publish"]]
    assert repo.created_tags == ["version-1.2.3"]
    assert repo.commits == ["Setting version to 1.2.3", "Setting version to 1.2.4-SNAPSHOT"]
    assert _version_in(project) == 'version := "1.2.4-SNAPSHOT"'


def test_publish_dry_run(project: Path, repo: FakeRepo, published: list[list[str]]) -> None:
    result = _invoke(project, "publish", "--dry-run")

    assert result.exit_code == 0
    assert "2. versionToStable" in result.output
    assert "nothing was executed" in result.output
    assert published == []
    assert repo.commits == []
    assert _version_in(project) == 'version := "1.2.3-SNAPSHOT"'


def test_publish_existing_tag(project: Path, repo: FakeRepo, published: list[list[str]]) -> None:
    repo.tags = "version-1.2.3"

    result = _invoke(project, "publish")

    assert result.exit_code == int(ErrorCode.RELEASE_ERROR)
    assert "tag already exists" in result.output
    assert published == []


def test_broken_config(project: Path, repo: FakeRepo) -> None:
    (project / "relkit.toml").write_text("[release\n", encoding="utf-8")

    result = _invoke(project, "show")

    assert result.exit_code == int(ErrorCode.USER_ERROR)

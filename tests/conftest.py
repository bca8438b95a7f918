"""Test configuration and fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import Mock

import pytest

from github_repo_automator.orchestrator.credentials import Credentials
from github_repo_automator.orchestrator.git.repository import GitRepository
from github_repo_automator.orchestrator.github.client import (
    CreatedItem,
    CreatedRepository,
    GitHubClient,
)
from github_repo_automator.orchestrator.prompt import Prompter
from github_repo_automator.orchestrator.report import Reporter


class EchoRecorder:
    """Stands in for `click.secho` and keeps every printed line."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def __call__(self, message: str, **_: Any) -> None:
        self.lines.append(message)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep settings and credentials away from the developer's real environment."""
    for name in (
        "LOG_LEVEL",
        "GITHUB_API_URL",
        "GHAUTO_CONFIG_PATH",
        "GHAUTO_GIT",
        "GHAUTO_DEFAULT_BRANCH",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """Provide an empty project directory."""
    directory = tmp_path / "demo"
    directory.mkdir()
    return directory


@pytest.fixture
def echo() -> EchoRecorder:
    return EchoRecorder()


@pytest.fixture
def reporter(echo: EchoRecorder) -> Reporter:
    return Reporter(echo=echo)


@pytest.fixture
def prompter() -> Prompter:
    """A prompter that always answers with the default."""
    return Prompter(interactive=False)


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(token="test-token", username="alice", default_branch="main")


@pytest.fixture
def git(workdir: Path) -> Mock:
    """A git repository that already exists and succeeds at everything."""
    repo = Mock(spec=GitRepository)
    repo.directory = workdir
    repo.is_repository.return_value = True
    repo.status_porcelain.return_value = " M README.md"
    repo.current_branch.return_value = "main"
    repo.remote_url.return_value = "git@github.com:alice/demo.git"
    repo.list_branches.return_value = "* main\n  feature"
    return repo


@pytest.fixture
def github() -> Mock:
    client = Mock(spec=GitHubClient)
    client.create_repository.return_value = CreatedRepository(
        full_name="alice/demo",
        html_url="https://github.com/alice/demo",
        ssh_url="git@github.com:alice/demo.git",
        clone_url="https://github.com/alice/demo.git",
    )
    client.get_gitignore_template.return_value = "__pycache__/\n*.pyc\n"
    client.get_license_text.return_value = "MIT License\n\nCopyright (c) alice\n"
    client.create_issue.return_value = CreatedItem(
        number=7, html_url="https://github.com/alice/demo/issues/7"
    )
    client.create_pull_request.return_value = CreatedItem(
        number=8, html_url="https://github.com/alice/demo/pull/8"
    )
    return client


@pytest.fixture
def github_factory(github: Mock) -> Mock:
    return Mock(return_value=github)

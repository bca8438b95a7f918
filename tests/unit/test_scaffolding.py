"""Unit tests for the standalone `gitignore`, `workflow` commands and the init resolver."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock

import pytest

from github_repo_automator.orchestrator.credentials import Credentials
from github_repo_automator.orchestrator.descriptors import Visibility
from github_repo_automator.orchestrator.errors import FatalStepError, RemoteError
from github_repo_automator.orchestrator.prompt import Prompter
from github_repo_automator.orchestrator.report import Reporter
from github_repo_automator.orchestrator.workflow.resolver import (
    RepositoryInfoResolver,
    default_repository_name,
)
from github_repo_automator.orchestrator.workflow.scaffolding import Scaffolder


def _scaffolder(
    workdir: Path, github_factory: Mock, prompter: Prompter, reporter: Reporter
) -> Scaffolder:
    return Scaffolder(
        directory=workdir, github_factory=github_factory, prompter=prompter, reporter=reporter
    )


def test_gitignore_defaults_to_python_template(
    workdir: Path,
    github: Mock,
    github_factory: Mock,
    prompter: Prompter,
    reporter: Reporter,
    credentials: Credentials,
) -> None:
    path = _scaffolder(workdir, github_factory, prompter, reporter).gitignore(credentials)

    github.get_gitignore_template.assert_called_once_with("Python")
    assert path == workdir / ".gitignore"


def test_gitignore_fetch_failure_is_fatal(
    workdir: Path,
    github: Mock,
    github_factory: Mock,
    prompter: Prompter,
    reporter: Reporter,
    credentials: Credentials,
) -> None:
    github.get_gitignore_template.side_effect = RemoteError(404, "Not Found")

    with pytest.raises(FatalStepError, match="404 Not Found"):
        _scaffolder(workdir, github_factory, prompter, reporter).gitignore(credentials, "Nope")

    assert not (workdir / ".gitignore").exists()
    github.close.assert_called_once_with()


def test_workflow_without_kind_uses_first_choice(
    workdir: Path, github_factory: Mock, prompter: Prompter, reporter: Reporter
) -> None:
    path = _scaffolder(workdir, github_factory, prompter, reporter).workflow(branch="trunk")

    assert path == workdir / ".github" / "workflows" / "ci.yml"
    assert "trunk" in path.read_text(encoding="utf-8")
    github_factory.assert_not_called()


def test_default_repository_name_sanitizes(tmp_path: Path) -> None:
    directory = tmp_path / "My Project!"
    directory.mkdir()

    assert default_repository_name(directory) == "My-Project"


def test_resolver_without_input_uses_defaults(workdir: Path, prompter: Prompter) -> None:
    creds = Credentials(token="t", username="alice", default_license="apache-2.0")

    descriptor = RepositoryInfoResolver(prompter).resolve(directory=workdir, credentials=creds)

    assert descriptor.name == "demo"
    assert descriptor.description == ""
    assert descriptor.visibility is Visibility.PUBLIC
    assert descriptor.license == "apache-2.0"


def test_resolver_flags_take_precedence(workdir: Path) -> None:
    prompter = Mock(spec=Prompter)

    descriptor = RepositoryInfoResolver(prompter).resolve(
        directory=workdir, name="other", description="Desc", private=True, license="mit"
    )

    prompter.ask.assert_not_called()
    prompter.choose.assert_not_called()
    assert descriptor.name == "other"
    assert descriptor.visibility is Visibility.PRIVATE
    assert descriptor.license == "mit"


def test_resolver_prompts_for_visibility(workdir: Path) -> None:
    prompter = Mock(spec=Prompter)
    prompter.choose.return_value = 1

    descriptor = RepositoryInfoResolver(prompter).resolve(
        directory=workdir, name="demo", description=""
    )

    assert descriptor.visibility is Visibility.PRIVATE

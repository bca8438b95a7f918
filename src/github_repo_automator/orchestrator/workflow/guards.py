"""Preconditions shared by several workflows."""

from __future__ import annotations

from collections.abc import Callable

from github_repo_automator.orchestrator.credentials import Credentials
from github_repo_automator.orchestrator.errors import PromptUnavailable
from github_repo_automator.orchestrator.git.repository import GitRepository
from github_repo_automator.orchestrator.github.client import GitHubClient
from github_repo_automator.orchestrator.workflow.policy import Step, StepRunner

GitHubFactory = Callable[[Credentials], GitHubClient]


def require_repository(git: GitRepository, runner: StepRunner) -> None:
    if not git.is_repository():
        runner.abort(Step.REQUIRE_REPOSITORY, "run 'ghauto init' first.")


def require_credentials(credentials: Credentials | None, runner: StepRunner) -> Credentials:
    if credentials is None or not credentials.is_complete:
        runner.abort(Step.REQUIRE_CREDENTIALS, "run 'ghauto config' first.")
    return credentials


def require_text(value: str, what: str) -> str:
    if not value.strip():
        raise PromptUnavailable(f"{what} is required")
    return value.strip()

"""Branch, issue and pull request workflows."""

from __future__ import annotations

import logging

from github_repo_automator.orchestrator.credentials import Credentials
from github_repo_automator.orchestrator.descriptors import IssueDescriptor, PullRequestDescriptor
from github_repo_automator.orchestrator.errors import RepositoryIdentityError, SoftStepError
from github_repo_automator.orchestrator.git.repository import REMOTE_NAME, GitRepository
from github_repo_automator.orchestrator.github.client import CreatedItem
from github_repo_automator.orchestrator.github.identity import (
    RepositoryIdentity,
    parse_repository_identity,
)
from github_repo_automator.orchestrator.prompt import (
    Prompter,
    parse_labels,
    resolve,
    resolve_text,
)
from github_repo_automator.orchestrator.report import Reporter
from github_repo_automator.orchestrator.workflow.guards import (
    GitHubFactory,
    require_credentials,
    require_repository,
    require_text,
)
from github_repo_automator.orchestrator.workflow.policy import (
    BRANCH_POLICY,
    BRANCH_SWITCH_POLICY,
    ISSUE_POLICY,
    PULL_REQUEST_POLICY,
    Step,
    StepRunner,
)

logger = logging.getLogger(__name__)


def _origin_identity(git: GitRepository) -> RepositoryIdentity:
    url = git.remote_url(REMOTE_NAME)
    if url is None:
        raise RepositoryIdentityError(f"no '{REMOTE_NAME}' remote is configured")
    return parse_repository_identity(url)


def _flag_labels(labels: list[str]) -> tuple[str, ...]:
    """Labels given by repeated `-l` flags: each flag is one label, even with commas."""

    return tuple(dict.fromkeys(name.strip() for name in labels if name.strip()))


class BranchManager:
    def __init__(self, *, git: GitRepository, reporter: Reporter) -> None:
        self._git = git
        self._reporter = reporter

    def create(self, name: str, *, checkout: bool = False) -> list[SoftStepError]:
        """Create a branch and optionally check it out; both steps are reported independently."""

        runner = StepRunner(BRANCH_POLICY, self._reporter)
        require_repository(self._git, runner)

        runner.run(
            Step.CREATE_BRANCH,
            lambda: self._git.create_branch(name),
            success=f"Branch created: {name}",
        )
        if checkout:
            runner.run(
                Step.CHECKOUT,
                lambda: self._git.checkout(name),
                success=f"Switched to branch: {name}",
            )
        return list(runner.soft_failures)

    def list(self) -> str:  # noqa: A003 (mirrors the subcommand name)
        runner = StepRunner(BRANCH_POLICY, self._reporter)
        require_repository(self._git, runner)

        branches = runner.run_required(Step.LIST_BRANCHES, self._git.list_branches)
        self._reporter.headline("Branches:")
        self._reporter.info(branches)
        return branches

    def switch(self, name: str) -> None:
        runner = StepRunner(BRANCH_SWITCH_POLICY, self._reporter)
        require_repository(self._git, runner)

        runner.run(
            Step.CHECKOUT,
            lambda: self._git.checkout(name),
            success=f"Switched to branch: {name}",
        )


class IssueCreator:
    def __init__(
        self,
        *,
        git: GitRepository,
        github_factory: GitHubFactory,
        prompter: Prompter,
        reporter: Reporter,
    ) -> None:
        self._git = git
        self._github_factory = github_factory
        self._prompter = prompter
        self._reporter = reporter

    def create(
        self,
        credentials: Credentials | None,
        *,
        title: str | None = None,
        body: str | None = None,
        labels: list[str] | None = None,
    ) -> CreatedItem:
        runner = StepRunner(ISSUE_POLICY, self._reporter)
        require_repository(self._git, runner)
        creds = require_credentials(credentials, runner)

        identity = runner.run_required(
            Step.REPOSITORY_IDENTITY, lambda: _origin_identity(self._git)
        )

        descriptor = runner.run_required(
            Step.COLLECT_DETAILS, lambda: self._describe(title=title, body=body, labels=labels)
        )

        github = self._github_factory(creds)
        try:
            created = runner.run_required(
                Step.SUBMIT_ISSUE,
                lambda: github.create_issue(identity.full_name, descriptor),
                success=lambda item: f"Issue created: {item.html_url or f'#{item.number}'}",
            )
        finally:
            github.close()

        logger.info(
            "Issue created",
            extra={"repository": identity.full_name, "issue_number": created.number},
        )
        return created

    def _describe(
        self, *, title: str | None, body: str | None, labels: list[str] | None
    ) -> IssueDescriptor:
        resolved_title = require_text(
            resolve_text(title, label="Issue title", default=None, prompter=self._prompter),
            "Issue title",
        )
        resolved_body = resolve_text(body, label="Issue body", default="", prompter=self._prompter)
        resolved_labels = resolve(
            _flag_labels(labels) if labels else None,
            label="Labels (comma separated)",
            default="",
            prompter=self._prompter,
            parse=parse_labels,
        )
        return IssueDescriptor(title=resolved_title, body=resolved_body, labels=resolved_labels)


class PullRequestCreator:
    def __init__(
        self,
        *,
        git: GitRepository,
        github_factory: GitHubFactory,
        prompter: Prompter,
        reporter: Reporter,
        default_base: str = "main",
    ) -> None:
        self._git = git
        self._github_factory = github_factory
        self._prompter = prompter
        self._reporter = reporter
        self._default_base = default_base

    def create(
        self,
        credentials: Credentials | None,
        *,
        title: str | None = None,
        body: str | None = None,
        base: str | None = None,
        head: str | None = None,
    ) -> CreatedItem:
        runner = StepRunner(PULL_REQUEST_POLICY, self._reporter)
        require_repository(self._git, runner)
        creds = require_credentials(credentials, runner)

        identity = runner.run_required(
            Step.REPOSITORY_IDENTITY, lambda: _origin_identity(self._git)
        )

        current = (
            head
            if head is not None
            else runner.run_required(Step.CURRENT_BRANCH, self._git.current_branch)
        )

        descriptor = runner.run_required(
            Step.COLLECT_DETAILS,
            lambda: self._describe(title=title, body=body, base=base, head=head, current=current),
        )

        head_branch = descriptor.head_branch
        runner.run(
            Step.PUSH,
            lambda: self._git.push(head_branch, set_upstream=True),
            success=f"Pushed branch {head_branch} to {REMOTE_NAME}.",
        )

        github = self._github_factory(creds)
        try:
            created = runner.run_required(
                Step.SUBMIT_PULL_REQUEST,
                lambda: github.create_pull_request(identity.full_name, descriptor),
                success=lambda item: f"Pull request created: {item.html_url or f'#{item.number}'}",
            )
        finally:
            github.close()

        logger.info(
            "Pull request created",
            extra={
                "repository": identity.full_name,
                "pull_number": created.number,
                "head": descriptor.head_branch,
                "base": descriptor.base_branch,
            },
        )
        return created

    def _describe(
        self,
        *,
        title: str | None,
        body: str | None,
        base: str | None,
        head: str | None,
        current: str,
    ) -> PullRequestDescriptor:
        resolved_title = require_text(
            resolve_text(title, label="Pull request title", default=None, prompter=self._prompter),
            "Pull request title",
        )
        resolved_body = resolve_text(
            body, label="Pull request description", default="", prompter=self._prompter
        )
        resolved_base = require_text(
            resolve_text(
                base, label="Base branch", default=self._default_base, prompter=self._prompter
            ),
            "Base branch",
        )
        resolved_head = require_text(
            resolve_text(head, label="Head branch", default=current, prompter=self._prompter),
            "Head branch",
        )
        return PullRequestDescriptor(
            title=resolved_title,
            body=resolved_body,
            base_branch=resolved_base,
            head_branch=resolved_head,
        )

"""`ghauto init`: from a local directory to a pushed GitHub repository.

Step order and severities (see `INITIALIZE_POLICY`):

 1. initialize git when the directory is not a work tree     FATAL
 2. require stored credentials                               FATAL
 3. .gitignore template (create or append)                   SOFT
 4. LICENSE text                                             SOFT
 5. create the GitHub repository, pick its clone URL         FATAL
 6. attach the URL as `origin`                               SOFT
 7. README.md when absent                                    SOFT
 8. workflow scaffold                                        SOFT
 9. stage everything, then "Initial commit"                  SOFT (each)
10. rename the branch to the configured default              SOFT
11. push with upstream tracking                              SOFT
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from github_repo_automator.orchestrator.credentials import Credentials
from github_repo_automator.orchestrator.descriptors import RepositoryDescriptor
from github_repo_automator.orchestrator.errors import RemoteError, SoftStepError
from github_repo_automator.orchestrator.git.repository import REMOTE_NAME, GitRepository
from github_repo_automator.orchestrator.github.client import GitHubClient
from github_repo_automator.orchestrator.report import Reporter
from github_repo_automator.orchestrator.scaffold.gitignore import merge_gitignore
from github_repo_automator.orchestrator.scaffold.license import write_license
from github_repo_automator.orchestrator.scaffold.readme import write_readme
from github_repo_automator.orchestrator.scaffold.workflows import write_workflow
from github_repo_automator.orchestrator.workflow.guards import (
    GitHubFactory,
    require_credentials,
)
from github_repo_automator.orchestrator.workflow.policy import (
    INITIALIZE_POLICY,
    Step,
    StepRunner,
)

logger = logging.getLogger(__name__)

INITIAL_COMMIT_MESSAGE = "Initial commit"


@dataclass(frozen=True, slots=True)
class InitRequest:
    descriptor: RepositoryDescriptor
    gitignore_template: str | None = None
    workflow_kind: str | None = None


@dataclass(frozen=True, slots=True)
class InitResult:
    remote_url: str
    branch: str
    pushed: bool
    soft_failures: list[SoftStepError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.soft_failures


class RepositoryInitializer:
    """Sequence local git and GitHub API calls for `ghauto init`."""

    def __init__(
        self,
        *,
        git: GitRepository,
        github_factory: GitHubFactory,
        reporter: Reporter,
        fallback_branch: str = "main",
    ) -> None:
        self._git = git
        self._github_factory = github_factory
        self._reporter = reporter
        self._fallback_branch = fallback_branch

    @property
    def directory(self) -> Path:
        return self._git.directory

    def run(self, request: InitRequest, credentials: Credentials | None) -> InitResult:
        """Run every step; raises `FatalStepError` on the first fatal failure."""

        runner = StepRunner(INITIALIZE_POLICY, self._reporter)
        descriptor = request.descriptor
        logger.info(
            "Initialization started",
            extra={"directory": str(self.directory), "repo_name": descriptor.name},
        )

        if self._git.is_repository():
            self._reporter.notice("This directory is already a git repository.")
        else:
            runner.run(
                Step.INIT_REPOSITORY,
                self._git.init,
                success="Git repository initialized successfully.",
            )

        creds = require_credentials(credentials, runner)
        target_branch = creds.default_branch or self._fallback_branch

        github = self._github_factory(creds)
        try:
            if request.gitignore_template:
                template = request.gitignore_template
                runner.run(
                    Step.GITIGNORE,
                    lambda: merge_gitignore(
                        self.directory, template, github.get_gitignore_template(template)
                    ),
                    success=f"Added {template} .gitignore template.",
                )

            if descriptor.license:
                license_key = descriptor.license
                runner.run(
                    Step.LICENSE,
                    lambda: write_license(self.directory, github.get_license_text(license_key)),
                    success=f"Added {license_key} license.",
                )

            remote_url = runner.run_required(
                Step.CREATE_REMOTE,
                lambda: self._create_remote(github, descriptor),
                success=lambda url: f"GitHub repository created: {url}",
            )
        finally:
            github.close()

        runner.run(
            Step.ATTACH_REMOTE,
            lambda: self._attach_remote(remote_url),
            success=lambda message: message,
        )

        runner.run(
            Step.README,
            lambda: write_readme(self.directory, descriptor),
            success=lambda wrote: "Created README.md file."
            if wrote
            else "README.md already exists; left unchanged.",
        )

        if request.workflow_kind:
            kind = request.workflow_kind
            runner.run(
                Step.WORKFLOW,
                lambda: write_workflow(self.directory, kind, branch=target_branch),
                success=f"Added {kind} workflow.",
            )

        runner.run(Step.STAGE, self._git.add_all, success="Added files to staging area.")
        runner.run(
            Step.COMMIT,
            lambda: self._git.commit(INITIAL_COMMIT_MESSAGE),
            success="Created initial commit.",
        )

        current = runner.run(Step.CURRENT_BRANCH, self._git.current_branch)
        if current is not None and current != target_branch:
            runner.run(
                Step.RENAME_BRANCH,
                lambda: self._git.rename_branch(target_branch),
                success=f"Renamed branch to {target_branch}.",
            )

        pushed = runner.run(
            Step.PUSH,
            lambda: self._push(target_branch),
            success="Project pushed to GitHub successfully!",
        )

        self._reporter.summary()
        result = InitResult(
            remote_url=remote_url,
            branch=target_branch,
            pushed=bool(pushed),
            soft_failures=list(runner.soft_failures),
        )
        logger.info(
            "Initialization finished",
            extra={
                "remote_url": remote_url,
                "branch": target_branch,
                "soft_failures": [f.step for f in result.soft_failures],
            },
        )
        return result

    @staticmethod
    def _create_remote(github: GitHubClient, descriptor: RepositoryDescriptor) -> str:
        """Create the repository and return the URL to attach as `origin`."""

        created = github.create_repository(descriptor)
        if created.preferred_url is None:
            raise RemoteError(None, "response did not include an SSH or HTTPS clone URL")
        return created.preferred_url

    def _attach_remote(self, url: str) -> str:
        existing = self._git.remote_url(REMOTE_NAME)
        if existing is None:
            self._git.add_remote(url, REMOTE_NAME)
            return f"Remote '{REMOTE_NAME}' added successfully."
        if existing == url:
            return f"Remote '{REMOTE_NAME}' already points to {url}."
        self._git.set_remote_url(url, REMOTE_NAME)
        return f"Remote '{REMOTE_NAME}' changed from {existing} to {url}."

    def _push(self, branch: str) -> bool:
        self._git.push(branch, set_upstream=True)
        return True

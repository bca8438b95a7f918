"""`ghauto push`: commit pending changes and push the current branch."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from github_repo_automator.orchestrator.errors import SoftStepError
from github_repo_automator.orchestrator.git.repository import GitRepository
from github_repo_automator.orchestrator.prompt import Prompter, resolve_text
from github_repo_automator.orchestrator.report import Reporter
from github_repo_automator.orchestrator.workflow.guards import require_repository
from github_repo_automator.orchestrator.workflow.policy import (
    SYNCHRONIZE_POLICY,
    Step,
    StepRunner,
)

logger = logging.getLogger(__name__)

DEFAULT_COMMIT_MESSAGE = "Update"


@dataclass(frozen=True, slots=True)
class SyncResult:
    branch: str
    committed: bool
    pushed: bool
    soft_failures: list[SoftStepError] = field(default_factory=list)


class RepositorySynchronizer:
    def __init__(self, *, git: GitRepository, prompter: Prompter, reporter: Reporter) -> None:
        self._git = git
        self._prompter = prompter
        self._reporter = reporter

    def run(self, message: str | None = None) -> SyncResult:
        runner = StepRunner(SYNCHRONIZE_POLICY, self._reporter)
        require_repository(self._git, runner)

        commit_message = (
            resolve_text(
                message,
                label="Commit message",
                default=DEFAULT_COMMIT_MESSAGE,
                prompter=self._prompter,
            )
            or DEFAULT_COMMIT_MESSAGE
        )

        # None means status could not be read; fall through to staging.
        changes = runner.run(Step.STATUS, self._git.status_porcelain)
        if changes == "":
            self._reporter.notice("No changes to commit. Working tree clean.")
            branch = self._current_branch(runner)
            pushed = runner.run(
                Step.PUSH,
                lambda: self._push(branch),
                success="Pushed existing commits to GitHub.",
            )
            logger.info("Nothing to commit; pushed existing commits", extra={"branch": branch})
            return SyncResult(
                branch=branch,
                committed=False,
                pushed=bool(pushed),
                soft_failures=list(runner.soft_failures),
            )

        runner.run(Step.STAGE, self._git.add_all, success="Added files to staging area.")
        runner.run(
            Step.COMMIT,
            lambda: self._git.commit(commit_message),
            success="Changes committed successfully.",
        )
        branch = self._current_branch(runner)
        pushed = runner.run(
            Step.PUSH,
            lambda: self._push(branch),
            success="Changes pushed to GitHub successfully!",
        )

        logger.info("Synchronization finished", extra={"branch": branch, "pushed": bool(pushed)})
        return SyncResult(
            branch=branch,
            committed=True,
            pushed=bool(pushed),
            soft_failures=list(runner.soft_failures),
        )

    def _current_branch(self, runner: StepRunner) -> str:
        return runner.run_required(Step.CURRENT_BRANCH, self._git.current_branch)

    def _push(self, branch: str) -> bool:
        self._git.push(branch)
        return True

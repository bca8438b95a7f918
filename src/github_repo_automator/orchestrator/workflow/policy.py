"""Step classification: which failures abort a workflow and which are only reported.

Every workflow has one explicit table mapping each of its steps to a severity
and the prefix printed in front of the underlying error text. The workflows
themselves never decide severity; they hand each step to `StepRunner`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import NoReturn, TypeVar, cast

from github_repo_automator.orchestrator.errors import (
    AutomatorError,
    FatalStepError,
    SoftStepError,
)
from github_repo_automator.orchestrator.report import Reporter

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Severity(str, Enum):
    FATAL = "fatal"
    SOFT = "soft"


class Step(str, Enum):
    REQUIRE_REPOSITORY = "require_repository"
    INIT_REPOSITORY = "init_repository"
    REQUIRE_CREDENTIALS = "require_credentials"
    GITIGNORE = "gitignore"
    LICENSE = "license"
    CREATE_REMOTE = "create_remote"
    ATTACH_REMOTE = "attach_remote"
    README = "readme"
    WORKFLOW = "workflow"
    STATUS = "status"
    STAGE = "stage"
    COMMIT = "commit"
    CURRENT_BRANCH = "current_branch"
    RENAME_BRANCH = "rename_branch"
    PUSH = "push"
    CREATE_BRANCH = "create_branch"
    CHECKOUT = "checkout"
    LIST_BRANCHES = "list_branches"
    REPOSITORY_IDENTITY = "repository_identity"
    COLLECT_DETAILS = "collect_details"
    SUBMIT_ISSUE = "submit_issue"
    SUBMIT_PULL_REQUEST = "submit_pull_request"
    VALIDATE_CREDENTIALS = "validate_credentials"
    SAVE_CREDENTIALS = "save_credentials"


@dataclass(frozen=True, slots=True)
class StepPolicy:
    severity: Severity
    failure_prefix: str


def _fatal(prefix: str) -> StepPolicy:
    return StepPolicy(Severity.FATAL, prefix)


def _soft(prefix: str) -> StepPolicy:
    return StepPolicy(Severity.SOFT, prefix)


# `ghauto init`: the gate steps (working tree, credentials, remote creation) are
# fatal; everything after them produces independently useful artefacts.
INITIALIZE_POLICY: Mapping[Step, StepPolicy] = {
    Step.INIT_REPOSITORY: _fatal("Failed to initialize git repository:"),
    Step.REQUIRE_CREDENTIALS: _fatal("No GitHub configuration found:"),
    Step.GITIGNORE: _soft("Failed to set up .gitignore:"),
    Step.LICENSE: _soft("Failed to set up license:"),
    Step.CREATE_REMOTE: _fatal("Failed to create GitHub repository:"),
    Step.ATTACH_REMOTE: _soft("Failed to add remote:"),
    Step.README: _soft("Failed to create README.md:"),
    Step.WORKFLOW: _soft("Failed to set up workflow:"),
    Step.STAGE: _soft("Failed to add files:"),
    Step.COMMIT: _soft("Failed to create initial commit:"),
    Step.CURRENT_BRANCH: _soft("Could not determine current branch:"),
    Step.RENAME_BRANCH: _soft("Failed to rename branch:"),
    Step.PUSH: _soft("Failed to push to GitHub:"),
}

# `ghauto push`: once staging starts, each step depends on the previous one.
# The final push is only reported; the work is already committed locally.
SYNCHRONIZE_POLICY: Mapping[Step, StepPolicy] = {
    Step.REQUIRE_REPOSITORY: _fatal("Not a git repository:"),
    Step.STATUS: _soft("Failed to check git status:"),
    Step.STAGE: _fatal("Failed to add files:"),
    Step.COMMIT: _fatal("Failed to commit changes:"),
    Step.CURRENT_BRANCH: _fatal("Failed to get current branch:"),
    Step.PUSH: _soft("Failed to push changes:"),
}

BRANCH_POLICY: Mapping[Step, StepPolicy] = {
    Step.REQUIRE_REPOSITORY: _fatal("Not a git repository:"),
    Step.CREATE_BRANCH: _soft("Failed to create branch:"),
    Step.CHECKOUT: _soft("Failed to switch branch:"),
    Step.LIST_BRANCHES: _fatal("Failed to list branches:"),
}

BRANCH_SWITCH_POLICY: Mapping[Step, StepPolicy] = {
    Step.REQUIRE_REPOSITORY: _fatal("Not a git repository:"),
    Step.CHECKOUT: _fatal("Failed to switch branch:"),
}

ISSUE_POLICY: Mapping[Step, StepPolicy] = {
    Step.REQUIRE_REPOSITORY: _fatal("Not a git repository:"),
    Step.REQUIRE_CREDENTIALS: _fatal("No GitHub configuration found:"),
    Step.REPOSITORY_IDENTITY: _fatal("Failed to determine GitHub repository:"),
    Step.COLLECT_DETAILS: _fatal("Missing issue details:"),
    Step.SUBMIT_ISSUE: _fatal("Failed to create issue:"),
}

# The head branch may already be on GitHub, so a failed push does not stop
# the pull request from being opened.
PULL_REQUEST_POLICY: Mapping[Step, StepPolicy] = {
    Step.REQUIRE_REPOSITORY: _fatal("Not a git repository:"),
    Step.REQUIRE_CREDENTIALS: _fatal("No GitHub configuration found:"),
    Step.REPOSITORY_IDENTITY: _fatal("Failed to determine GitHub repository:"),
    Step.CURRENT_BRANCH: _fatal("Failed to get current branch:"),
    Step.COLLECT_DETAILS: _fatal("Missing pull request details:"),
    Step.PUSH: _soft("Failed to push branch:"),
    Step.SUBMIT_PULL_REQUEST: _fatal("Failed to create pull request:"),
}

# Standalone `ghauto gitignore` / `ghauto workflow`: the scaffold is the whole job.
SCAFFOLD_POLICY: Mapping[Step, StepPolicy] = {
    Step.REQUIRE_CREDENTIALS: _fatal("No GitHub configuration found:"),
    Step.GITIGNORE: _fatal("Failed to set up .gitignore:"),
    Step.WORKFLOW: _fatal("Failed to set up workflow:"),
}

CONFIGURE_POLICY: Mapping[Step, StepPolicy] = {
    Step.VALIDATE_CREDENTIALS: _fatal("Invalid configuration:"),
    Step.SAVE_CREDENTIALS: _fatal("Failed to save configuration:"),
}


def _describe(error: BaseException) -> str:
    if isinstance(error, OSError) and error.strerror:
        target = f" ({error.filename})" if error.filename else ""
        return f"{error.strerror}{target}"
    return str(error) or type(error).__name__


class StepRunner:
    """Run workflow steps and apply the severity from a policy table.

    A failing FATAL step raises `FatalStepError`; a failing SOFT step is
    recorded as `SoftStepError` and `run` returns None so the caller continues.
    """

    def __init__(self, policy: Mapping[Step, StepPolicy], reporter: Reporter) -> None:
        self._policy = policy
        self._reporter = reporter
        self.soft_failures: list[SoftStepError] = []

    def run(
        self,
        step: Step,
        action: Callable[[], T],
        *,
        success: str | Callable[[T], str] | None = None,
    ) -> T | None:
        policy = self._policy[step]
        try:
            result = action()
        except (AutomatorError, OSError) as e:
            self.fail(step, _describe(e), cause=e)
            return None

        if success is not None:
            message = success(result) if callable(success) else success
            self._reporter.success(step.value, message)
        logger.debug(
            "Step succeeded", extra={"step": step.value, "severity": policy.severity.value}
        )
        return result

    def run_required(
        self,
        step: Step,
        action: Callable[[], T],
        *,
        success: str | Callable[[T], str] | None = None,
    ) -> T:
        """Like `run`, for FATAL steps only: a failure raises, so a result always exists."""

        self._require_fatal(step)
        return cast(T, self.run(step, action, success=success))

    def fail(self, step: Step, reason: str, *, cause: BaseException | None = None) -> None:
        """Report a failed step; raises when the step is fatal."""

        policy = self._policy[step]
        message = self._report(step, policy, reason)
        if policy.severity is Severity.FATAL:
            raise FatalStepError(step.value, message) from cause
        self.soft_failures.append(SoftStepError(step.value, message))

    def abort(self, step: Step, reason: str) -> NoReturn:
        """Report a FATAL step as failed and stop the workflow."""

        self._require_fatal(step)
        message = self._report(step, self._policy[step], reason)
        raise FatalStepError(step.value, message)

    def _require_fatal(self, step: Step) -> None:
        if self._policy[step].severity is not Severity.FATAL:
            raise ValueError(f"step {step.value!r} is not fatal in this workflow")

    def _report(self, step: Step, policy: StepPolicy, reason: str) -> str:
        message = f"{policy.failure_prefix} {reason}"
        self._reporter.failure(step.value, message)
        logger.warning(
            "Step failed",
            extra={"step": step.value, "severity": policy.severity.value, "reason": reason},
        )
        return message

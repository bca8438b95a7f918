"""`ghauto config`: create or update the stored credentials."""

from __future__ import annotations

import logging

from github_repo_automator.orchestrator.credentials import Credentials, CredentialStore
from github_repo_automator.orchestrator.errors import CredentialsError, PromptUnavailable
from github_repo_automator.orchestrator.prompt import Prompter
from github_repo_automator.orchestrator.report import Reporter
from github_repo_automator.orchestrator.workflow.policy import CONFIGURE_POLICY, Step, StepRunner

logger = logging.getLogger(__name__)


class Configurator:
    def __init__(
        self,
        *,
        store: CredentialStore,
        prompter: Prompter,
        reporter: Reporter,
        fallback_branch: str = "main",
    ) -> None:
        self._store = store
        self._prompter = prompter
        self._reporter = reporter
        self._fallback_branch = fallback_branch

    def _load_existing(self) -> Credentials:
        try:
            existing = self._store.load()
        except CredentialsError as e:
            self._reporter.notice(f"Ignoring unreadable configuration: {e}")
            existing = None
        return existing or Credentials(default_branch=self._fallback_branch)

    def run(
        self,
        *,
        token: str | None = None,
        username: str | None = None,
        default_branch: str | None = None,
        default_license: str | None = None,
    ) -> Credentials:
        runner = StepRunner(CONFIGURE_POLICY, self._reporter)
        current = self._load_existing()

        updates: dict[str, str | None] = {}
        if token is not None:
            updates["token"] = token.strip()
        if username is not None:
            updates["username"] = username.strip()
        if default_branch is not None:
            updates["default_branch"] = default_branch.strip() or None
        if default_license is not None:
            updates["default_license"] = default_license.strip() or None

        if not updates:
            updates = self._ask(current)

        config = current.model_copy(update=updates)

        if not config.is_complete:
            runner.abort(Step.VALIDATE_CREDENTIALS, "GitHub token and username are required.")

        runner.run(
            Step.SAVE_CREDENTIALS,
            lambda: self._store.save(config),
            success="Configuration saved successfully.",
        )
        logger.info(
            "Configuration updated",
            extra={"path": str(self._store.path), "username": config.username},
        )
        return config

    def _ask(self, current: Credentials) -> dict[str, str | None]:
        self._reporter.headline("GitHub Configuration")
        self._reporter.info("Please provide your GitHub credentials.")

        answers: dict[str, str | None] = {
            "username": self._prompter.ask("GitHub username", current.username).strip()
        }

        try:
            answers["token"] = self._prompter.ask_secret_with_confirmation(
                "GitHub Personal Access Token (with repo scope)"
            ).strip()
        except PromptUnavailable:
            if current.token:
                self._reporter.notice("Keeping the stored token.")

        branch = self._prompter.ask(
            "Default branch name", current.default_branch or self._fallback_branch
        ).strip()
        answers["default_branch"] = branch or self._fallback_branch
        return answers

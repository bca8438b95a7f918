"""Standalone `ghauto gitignore` and `ghauto workflow`."""

from __future__ import annotations

from pathlib import Path

from github_repo_automator.orchestrator.credentials import Credentials
from github_repo_automator.orchestrator.prompt import Prompter, resolve_text
from github_repo_automator.orchestrator.report import Reporter
from github_repo_automator.orchestrator.scaffold.gitignore import merge_gitignore
from github_repo_automator.orchestrator.scaffold.workflows import WORKFLOW_KINDS, write_workflow
from github_repo_automator.orchestrator.workflow.guards import GitHubFactory, require_credentials
from github_repo_automator.orchestrator.workflow.policy import SCAFFOLD_POLICY, Step, StepRunner

DEFAULT_GITIGNORE_TEMPLATE = "Python"


class Scaffolder:
    def __init__(
        self,
        *,
        directory: Path,
        github_factory: GitHubFactory,
        prompter: Prompter,
        reporter: Reporter,
    ) -> None:
        self._directory = directory
        self._github_factory = github_factory
        self._prompter = prompter
        self._reporter = reporter

    def gitignore(self, credentials: Credentials | None, template: str | None = None) -> Path:
        runner = StepRunner(SCAFFOLD_POLICY, self._reporter)
        creds = require_credentials(credentials, runner)

        name = (
            resolve_text(
                template,
                label="Gitignore template (e.g. Python, Node, Rust)",
                default=DEFAULT_GITIGNORE_TEMPLATE,
                prompter=self._prompter,
            )
            or DEFAULT_GITIGNORE_TEMPLATE
        )

        github = self._github_factory(creds)
        try:
            path = runner.run_required(
                Step.GITIGNORE,
                lambda: merge_gitignore(self._directory, name, github.get_gitignore_template(name)),
                success=f"Added {name} .gitignore template.",
            )
        finally:
            github.close()
        return path

    def workflow(self, kind: str | None = None, *, branch: str = "main") -> Path:
        runner = StepRunner(SCAFFOLD_POLICY, self._reporter)

        if kind is None:
            kind = WORKFLOW_KINDS[self._prompter.choose("Workflow type", WORKFLOW_KINDS, 0)]

        chosen = kind
        path = runner.run_required(
            Step.WORKFLOW,
            lambda: write_workflow(self._directory, chosen, branch=branch),
            success=lambda p: f"Created workflow {p.relative_to(self._directory)}.",
        )
        return path

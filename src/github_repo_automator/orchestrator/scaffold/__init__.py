"""Files written into the working tree: .gitignore, LICENSE, README.md, workflows."""

from github_repo_automator.orchestrator.scaffold.gitignore import merge_gitignore
from github_repo_automator.orchestrator.scaffold.license import write_license
from github_repo_automator.orchestrator.scaffold.readme import write_readme
from github_repo_automator.orchestrator.scaffold.workflows import WORKFLOW_KINDS, write_workflow

__all__ = [
    "WORKFLOW_KINDS",
    "merge_gitignore",
    "write_license",
    "write_readme",
    "write_workflow",
]

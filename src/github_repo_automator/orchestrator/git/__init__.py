"""Local version control access."""

from github_repo_automator.orchestrator.git.repository import GitRepository
from github_repo_automator.orchestrator.git.runner import CommandResult, CommandRunner

__all__ = ["CommandResult", "CommandRunner", "GitRepository"]

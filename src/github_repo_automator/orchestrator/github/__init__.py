"""GitHub API access."""

from github_repo_automator.orchestrator.github.client import (
    CreatedItem,
    CreatedRepository,
    GitHubClient,
)
from github_repo_automator.orchestrator.github.identity import (
    RepositoryIdentity,
    parse_repository_identity,
)

__all__ = [
    "CreatedItem",
    "CreatedRepository",
    "GitHubClient",
    "RepositoryIdentity",
    "parse_repository_identity",
]

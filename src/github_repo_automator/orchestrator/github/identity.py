"""Derive `owner/repo` from a git remote URL."""

from __future__ import annotations

import re
from dataclasses import dataclass

from github_repo_automator.orchestrator.errors import RepositoryIdentityError

_SCP_STYLE = re.compile(r"^[\w.-]+@github\.com:(?P<owner>[^/\s]+)/(?P<name>[^/\s]+?)(?:\.git)?/?$")
_URL_STYLE = re.compile(
    r"^(?:https?|ssh|git)://(?:[^@/\s]+@)?github\.com(?::\d+)?/"
    r"(?P<owner>[^/\s]+)/(?P<name>[^/\s]+?)(?:\.git)?/?$"
)


@dataclass(frozen=True, slots=True)
class RepositoryIdentity:
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


def parse_repository_identity(url: str) -> RepositoryIdentity:
    """Parse `git@github.com:owner/repo.git` or `https://github.com/owner/repo.git`.

    Raises:
        RepositoryIdentityError: the URL does not point at a github.com repository.
    """

    candidate = url.strip()
    for pattern in (_SCP_STYLE, _URL_STYLE):
        match = pattern.match(candidate)
        if match:
            return RepositoryIdentity(owner=match.group("owner"), name=match.group("name"))
    raise RepositoryIdentityError(f"could not parse a GitHub repository from remote URL {url!r}")

"""Unit tests for deriving `owner/repo` from remote URLs."""

from __future__ import annotations

import pytest

from github_repo_automator.orchestrator.errors import RepositoryIdentityError
from github_repo_automator.orchestrator.github.identity import parse_repository_identity


@pytest.mark.parametrize(
    "url",
    [
        "git@github.com:alice/proj.git",
        "git@github.com:alice/proj",
        "https://github.com/alice/proj.git",
        "https://github.com/alice/proj",
        "https://token@github.com/alice/proj.git/",
        "ssh://git@github.com/alice/proj.git",
        "  https://github.com/alice/proj.git\n",
    ],
)
def test_parse_repository_identity_accepts_github_urls(url: str) -> None:
    identity = parse_repository_identity(url)

    assert identity.owner == "alice"
    assert identity.name == "proj"
    assert identity.full_name == "alice/proj"


def test_parse_repository_identity_keeps_dots_in_name() -> None:
    assert parse_repository_identity("git@github.com:alice/my.site.git").name == "my.site"


@pytest.mark.parametrize(
    "url",
    [
        "git@gitlab.com:alice/proj.git",
        "https://gitlab.com/alice/proj.git",
        "https://github.com/alice",
        "/srv/git/proj.git",
        "",
    ],
)
def test_parse_repository_identity_rejects_other_hosts(url: str) -> None:
    with pytest.raises(RepositoryIdentityError):
        parse_repository_identity(url)

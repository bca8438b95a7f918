"""GitHub API client.

REST calls go through a plain `requests.Session` so every request carries the
same versioned media type, user agent and token header.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import requests

from github_repo_automator import __version__
from github_repo_automator.orchestrator.descriptors import (
    IssueDescriptor,
    PullRequestDescriptor,
    RepositoryDescriptor,
)
from github_repo_automator.orchestrator.errors import RemoteError

logger = logging.getLogger(__name__)

ACCEPT_MEDIA_TYPE = "application/vnd.github.v3+json"
USER_AGENT = f"ghauto/{__version__}"
REQUEST_TIMEOUT_SECONDS = 30


@dataclass(frozen=True, slots=True)
class CreatedRepository:
    """Minimal repository metadata returned from GitHub."""

    full_name: str
    html_url: str | None
    ssh_url: str | None
    clone_url: str | None

    @property
    def preferred_url(self) -> str | None:
        """SSH clone URL when present, otherwise the HTTPS clone URL."""

        return self.ssh_url or self.clone_url


@dataclass(frozen=True, slots=True)
class CreatedItem:
    """An issue or pull request created on GitHub."""

    number: int | None
    html_url: str | None


def _str_or_none(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


class GitHubClient:
    """Small wrapper around the GitHub REST API for the calls the workflows need."""

    def __init__(
        self,
        *,
        token: str,
        base_url: str = "https://api.github.com",
        session: requests.Session | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")

        self._rest_base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"token {token}",
                "Accept": ACCEPT_MEDIA_TYPE,
                "User-Agent": USER_AGENT,
            }
        )

    def _url(self, path_or_url: str) -> str:
        if path_or_url.startswith(("http://", "https://")):
            return path_or_url
        return f"{self._rest_base_url}/{path_or_url.lstrip('/')}"

    def request(
        self,
        method: str,
        path_or_url: str,
        *,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Issue one API call and return the decoded JSON object.

        Raises:
            RemoteError: non-2xx status (status code + body) or transport failure.
        """

        url = self._url(path_or_url)
        logger.debug("GitHub request", extra={"method": method, "url": url})
        try:
            resp = self._session.request(method, url, json=json, timeout=REQUEST_TIMEOUT_SECONDS)
        except requests.RequestException as e:
            raise RemoteError(None, str(e)) from e

        if not 200 <= resp.status_code < 300:
            raise RemoteError(resp.status_code, (resp.text or "").strip())

        if not resp.content:
            return {}
        try:
            data = resp.json()
        except ValueError as e:
            raise RemoteError(resp.status_code, "response body is not valid JSON") from e
        if not isinstance(data, dict):
            raise RemoteError(resp.status_code, "unexpected response shape (expected an object)")
        return data

    def create_repository(self, descriptor: RepositoryDescriptor) -> CreatedRepository:
        """Create a repository for the authenticated user.

        `auto_init` is always false: the local tree is the source of truth and is
        pushed right after creation.
        """

        payload: dict[str, Any] = {
            "name": descriptor.name,
            "description": descriptor.description,
            "private": descriptor.visibility.is_private,
            "auto_init": False,
        }
        if descriptor.license:
            payload["license_template"] = descriptor.license

        logger.info("Creating repository", extra={"repo_name": descriptor.name})
        data = self.request("POST", "user/repos", json=payload)
        created = CreatedRepository(
            full_name=_str_or_none(data.get("full_name")) or descriptor.name,
            html_url=_str_or_none(data.get("html_url")),
            ssh_url=_str_or_none(data.get("ssh_url")),
            clone_url=_str_or_none(data.get("clone_url")),
        )
        logger.info("Repository created", extra={"full_name": created.full_name})
        return created

    def get_gitignore_template(self, name: str) -> str:
        data = self.request("GET", f"gitignore/templates/{quote(name, safe='')}")
        source = data.get("source")
        if not isinstance(source, str):
            raise RemoteError(None, f"gitignore template {name!r} has no source")
        return source

    def get_license_text(self, key: str) -> str:
        data = self.request("GET", f"licenses/{quote(key, safe='')}")
        body = data.get("body")
        if not isinstance(body, str):
            raise RemoteError(None, f"license {key!r} has no body")
        return body

    def create_issue(self, repository: str, descriptor: IssueDescriptor) -> CreatedItem:
        payload = {
            "title": descriptor.title,
            "body": descriptor.body,
            "labels": list(descriptor.labels),
        }
        logger.info("Creating issue", extra={"repository": repository, "title": descriptor.title})
        data = self.request("POST", f"repos/{repository.strip('/')}/issues", json=payload)
        return self._created_item(data)

    def create_pull_request(
        self, repository: str, descriptor: PullRequestDescriptor
    ) -> CreatedItem:
        payload = {
            "title": descriptor.title,
            "body": descriptor.body,
            "head": descriptor.head_branch,
            "base": descriptor.base_branch,
        }
        logger.info(
            "Creating pull request",
            extra={
                "repository": repository,
                "head": descriptor.head_branch,
                "base": descriptor.base_branch,
            },
        )
        data = self.request("POST", f"repos/{repository.strip('/')}/pulls", json=payload)
        return self._created_item(data)

    @staticmethod
    def _created_item(data: dict[str, Any]) -> CreatedItem:
        number = data.get("number")
        return CreatedItem(
            number=number if isinstance(number, int) else None,
            html_url=_str_or_none(data.get("html_url")),
        )

    def close(self) -> None:
        self._session.close()
        logger.debug("GitHub client closed")

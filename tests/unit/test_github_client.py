"""Unit tests for the GitHub REST client.

The session's `request` method is replaced, so no network calls are made.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import Mock

import pytest
import requests

from github_repo_automator.orchestrator.descriptors import (
    IssueDescriptor,
    PullRequestDescriptor,
    RepositoryDescriptor,
    Visibility,
)
from github_repo_automator.orchestrator.errors import RemoteError
from github_repo_automator.orchestrator.github.client import (
    ACCEPT_MEDIA_TYPE,
    USER_AGENT,
    GitHubClient,
)


def _response(status: int, payload: Any = None, text: str | None = None) -> Mock:
    resp = Mock()
    resp.status_code = status
    resp.json.return_value = payload
    resp.text = text if text is not None else ("" if payload is None else str(payload))
    resp.content = b"" if payload is None and not text else b"{}"
    return resp


def _client(*responses: Mock) -> tuple[GitHubClient, Mock]:
    session = requests.Session()
    session.request = Mock(side_effect=list(responses))  # type: ignore[method-assign]
    client = GitHubClient(
        token="test-token",
        base_url="https://api.github.com/",
        session=session,
    )
    return client, session.request


def test_session_carries_auth_accept_and_user_agent_headers() -> None:
    client, _ = _client()

    headers = client._session.headers
    assert headers["Authorization"] == "token test-token"
    assert headers["Accept"] == ACCEPT_MEDIA_TYPE
    assert headers["User-Agent"] == USER_AGENT


def test_create_repository_sends_auto_init_false_and_prefers_ssh() -> None:
    client, request = _client(
        _response(
            201,
            {
                "full_name": "alice/demo",
                "html_url": "https://github.com/alice/demo",
                "ssh_url": "git@github.com:alice/demo.git",
                "clone_url": "https://github.com/alice/demo.git",
            },
        )
    )

    created = client.create_repository(
        RepositoryDescriptor(name="demo", description="A demo", visibility=Visibility.PRIVATE)
    )

    method, url = request.call_args.args
    assert (method, url) == ("POST", "https://api.github.com/user/repos")
    assert request.call_args.kwargs["json"] == {
        "name": "demo",
        "description": "A demo",
        "private": True,
        "auto_init": False,
    }
    assert created.preferred_url == "git@github.com:alice/demo.git"


def test_create_repository_includes_license_template_when_set() -> None:
    client, request = _client(
        _response(
            201, {"full_name": "alice/demo", "clone_url": "https://github.com/alice/demo.git"}
        )
    )

    created = client.create_repository(RepositoryDescriptor(name="demo", license="mit"))

    assert request.call_args.kwargs["json"]["license_template"] == "mit"
    assert created.preferred_url == "https://github.com/alice/demo.git"


def test_non_2xx_raises_remote_error_with_status_and_body() -> None:
    client, _ = _client(_response(422, text='{"message": "name already exists"}'))

    with pytest.raises(RemoteError) as excinfo:
        client.create_repository(RepositoryDescriptor(name="demo"))

    assert excinfo.value.status_code == 422
    assert "name already exists" in str(excinfo.value)
    assert str(excinfo.value).startswith("422 ")


def test_transport_failure_raises_remote_error() -> None:
    session = requests.Session()
    failure = requests.ConnectionError("connection refused")
    session.request = Mock(side_effect=failure)  # type: ignore[method-assign]
    client = GitHubClient(token="test-token", session=session)

    with pytest.raises(RemoteError, match="connection refused") as excinfo:
        client.get_license_text("mit")

    assert excinfo.value.status_code is None


def test_gitignore_and_license_fetch_return_text() -> None:
    client, request = _client(
        _response(200, {"name": "Python", "source": "__pycache__/\n"}),
        _response(200, {"key": "mit", "body": "MIT License\n"}),
    )

    assert client.get_gitignore_template("Python") == "__pycache__/\n"
    assert client.get_license_text("mit") == "MIT License\n"
    urls = [c.args[1] for c in request.call_args_list]
    assert urls == [
        "https://api.github.com/gitignore/templates/Python",
        "https://api.github.com/licenses/mit",
    ]


def test_create_issue_and_pull_request_payloads() -> None:
    client, request = _client(
        _response(201, {"number": 3, "html_url": "https://github.com/alice/demo/issues/3"}),
        _response(201, {"number": 4, "html_url": "https://github.com/alice/demo/pull/4"}),
    )

    issue = client.create_issue(
        "alice/demo", IssueDescriptor(title="Bug", body="It broke", labels=("bug",))
    )
    pr = client.create_pull_request(
        "alice/demo",
        PullRequestDescriptor(title="Fix", body="", base_branch="main", head_branch="fix"),
    )

    first, second = request.call_args_list
    assert first.args[1] == "https://api.github.com/repos/alice/demo/issues"
    assert first.kwargs["json"] == {"title": "Bug", "body": "It broke", "labels": ["bug"]}
    assert second.args[1] == "https://api.github.com/repos/alice/demo/pulls"
    assert second.kwargs["json"] == {"title": "Fix", "body": "", "head": "fix", "base": "main"}
    assert issue.number == 3
    assert pr.html_url == "https://github.com/alice/demo/pull/4"


def test_token_is_required() -> None:
    with pytest.raises(ValueError):
        GitHubClient(token="")

"""Named git operations bound to one working directory.

This keeps raw argument lists out of the workflows and gives tests a single
seam to replace with `Mock(spec=GitRepository)`.
"""

from __future__ import annotations

from pathlib import Path

from github_repo_automator.orchestrator.errors import CommandError
from github_repo_automator.orchestrator.git.runner import CommandRunner

REMOTE_NAME = "origin"


class GitRepository:
    def __init__(
        self,
        directory: Path,
        *,
        runner: CommandRunner | None = None,
        program: str = "git",
    ) -> None:
        self._directory = directory
        self._runner = runner or CommandRunner()
        self._program = program

    @property
    def directory(self) -> Path:
        return self._directory

    def _git(self, *args: str) -> str:
        result = self._runner.run(self._program, list(args), cwd=self._directory)
        return result.stdout_text

    def is_repository(self) -> bool:
        """Return True when the directory is inside a git work tree."""

        try:
            out = self._git("rev-parse", "--is-inside-work-tree")
        except CommandError:
            return False
        return out.strip() == "true"

    def init(self) -> None:
        self._git("init")

    def add_all(self) -> None:
        self._git("add", ".")

    def commit(self, message: str) -> None:
        self._git("commit", "-m", message)

    def status_porcelain(self) -> str:
        return self._git("status", "--porcelain").strip()

    def current_branch(self) -> str:
        """Return the checked-out branch name.

        `symbolic-ref` also answers on an unborn branch (no commits yet), which
        `rev-parse --abbrev-ref HEAD` does not.
        """

        name = self._git("symbolic-ref", "--short", "HEAD").strip()
        if not name:
            raise CommandError("could not determine the current branch")
        return name

    def rename_branch(self, name: str) -> None:
        self._git("branch", "-M", name)

    def push(self, branch: str, *, set_upstream: bool = False, remote: str = REMOTE_NAME) -> None:
        if set_upstream:
            self._git("push", "-u", remote, branch)
        else:
            self._git("push", remote, branch)

    def remote_url(self, remote: str = REMOTE_NAME) -> str | None:
        """Return the configured URL of a remote, or None when it does not exist."""

        try:
            url = self._git("remote", "get-url", remote).strip()
        except CommandError:
            return None
        return url or None

    def add_remote(self, url: str, remote: str = REMOTE_NAME) -> None:
        self._git("remote", "add", remote, url)

    def set_remote_url(self, url: str, remote: str = REMOTE_NAME) -> None:
        self._git("remote", "set-url", remote, url)

    def create_branch(self, name: str) -> None:
        self._git("branch", name)

    def list_branches(self) -> str:
        return self._git("branch").rstrip()

    def checkout(self, name: str) -> None:
        self._git("checkout", name)

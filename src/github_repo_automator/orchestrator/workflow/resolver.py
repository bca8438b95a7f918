"""Build the repository descriptor for `ghauto init`."""

from __future__ import annotations

import re
from pathlib import Path

from github_repo_automator.orchestrator.credentials import Credentials
from github_repo_automator.orchestrator.descriptors import RepositoryDescriptor, Visibility
from github_repo_automator.orchestrator.prompt import Prompter, resolve_text

_VISIBILITY_OPTIONS: tuple[Visibility, ...] = (Visibility.PUBLIC, Visibility.PRIVATE)


def default_repository_name(directory: Path) -> str:
    """Directory base name, reduced to characters GitHub accepts in repository names."""

    name = directory.resolve().name
    cleaned = re.sub(r"[^A-Za-z0-9._-]+", "-", name).strip("-")
    return cleaned or "repository"


class RepositoryInfoResolver:
    def __init__(self, prompter: Prompter) -> None:
        self._prompter = prompter

    def resolve(
        self,
        *,
        directory: Path,
        name: str | None = None,
        description: str | None = None,
        private: bool = False,
        license: str | None = None,
        credentials: Credentials | None = None,
    ) -> RepositoryDescriptor:
        fallback_name = default_repository_name(directory)
        resolved_name = (
            resolve_text(
                name, label="Repository name", default=fallback_name, prompter=self._prompter
            )
            or fallback_name
        )
        resolved_description = resolve_text(
            description, label="Repository description", default="", prompter=self._prompter
        )

        if private:
            visibility = Visibility.PRIVATE
        else:
            index = self._prompter.choose(
                "Repository visibility", [v.value for v in _VISIBILITY_OPTIONS], 0
            )
            visibility = _VISIBILITY_OPTIONS[index]

        resolved_license = license or (credentials.default_license if credentials else None)

        return RepositoryDescriptor(
            name=resolved_name,
            description=resolved_description,
            visibility=visibility,
            license=resolved_license or None,
        )

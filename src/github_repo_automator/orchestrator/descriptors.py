"""Immutable inputs for the remote-creation calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Visibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"

    @property
    def is_private(self) -> bool:
        return self is Visibility.PRIVATE


@dataclass(frozen=True, slots=True)
class RepositoryDescriptor:
    """Everything needed to create one GitHub repository."""

    name: str
    description: str = ""
    visibility: Visibility = Visibility.PUBLIC
    license: str | None = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("repository name is required")


@dataclass(frozen=True, slots=True)
class IssueDescriptor:
    title: str
    body: str = ""
    # Set semantics: no duplicates, order irrelevant.
    labels: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.title.strip():
            raise ValueError("issue title is required")


@dataclass(frozen=True, slots=True)
class PullRequestDescriptor:
    title: str
    body: str
    base_branch: str
    head_branch: str

    def __post_init__(self) -> None:
        if not self.title.strip():
            raise ValueError("pull request title is required")
        if not self.base_branch.strip() or not self.head_branch.strip():
            raise ValueError("pull request base and head branches are required")

"""Unit tests for the file scaffolds (.gitignore, LICENSE, README, workflows)."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from github_repo_automator.orchestrator.descriptors import RepositoryDescriptor
from github_repo_automator.orchestrator.errors import ScaffoldError
from github_repo_automator.orchestrator.scaffold import (
    WORKFLOW_KINDS,
    merge_gitignore,
    write_license,
    write_readme,
    write_workflow,
)
from github_repo_automator.orchestrator.scaffold.gitignore import template_marker
from github_repo_automator.orchestrator.scaffold.readme import render_readme
from github_repo_automator.orchestrator.scaffold.workflows import render_workflow


def test_merge_gitignore_creates_file(tmp_path: Path) -> None:
    path = merge_gitignore(tmp_path, "Python", "__pycache__/")

    assert path == tmp_path / ".gitignore"
    assert path.read_text(encoding="utf-8") == "__pycache__/\n"


def test_merge_gitignore_keeps_existing_bytes_as_prefix(tmp_path: Path) -> None:
    existing = b"secrets.txt\r\nbuild"
    (tmp_path / ".gitignore").write_bytes(existing)

    merge_gitignore(tmp_path, "Node", "node_modules/\n")

    merged = (tmp_path / ".gitignore").read_bytes()
    assert merged.startswith(existing)
    assert template_marker("Node").encode() in merged
    assert merged.endswith(b"node_modules/\n")


def test_write_license_is_verbatim(tmp_path: Path) -> None:
    text = "MIT License\n\nCopyright (c) [year] [fullname]\n"

    path = write_license(tmp_path, text)

    assert path.read_text(encoding="utf-8") == text


def test_render_readme() -> None:
    assert render_readme(RepositoryDescriptor(name="demo")) == "# demo\n"
    assert render_readme(RepositoryDescriptor(name="demo", description="A demo")) == (
        "# demo\n\nA demo\n"
    )


def test_write_readme_leaves_existing_file(tmp_path: Path) -> None:
    (tmp_path / "README.md").write_text("hand written\n", encoding="utf-8")

    wrote = write_readme(tmp_path, RepositoryDescriptor(name="demo"))

    assert wrote is False
    assert (tmp_path / "README.md").read_text(encoding="utf-8") == "hand written\n"


@pytest.mark.parametrize("kind", WORKFLOW_KINDS)
def test_write_workflow_produces_valid_yaml(tmp_path: Path, kind: str) -> None:
    path = write_workflow(tmp_path, kind, branch="trunk")

    assert path == tmp_path / ".github" / "workflows" / f"{kind}.yml"
    document = yaml.safe_load(path.read_text(encoding="utf-8"))
    assert "jobs" in document


def test_ci_workflow_targets_branch() -> None:
    document = yaml.safe_load(render_workflow("ci", branch="trunk"))

    assert document["on"]["push"]["branches"] == ["trunk"]
    assert document["on"]["pull_request"]["branches"] == ["trunk"]


def test_unknown_workflow_kind_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ScaffoldError, match="unknown workflow type"):
        write_workflow(tmp_path, "nightly")

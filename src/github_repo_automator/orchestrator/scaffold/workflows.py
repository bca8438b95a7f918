"""GitHub Actions workflow scaffolds.

Workflows are built as plain dicts and rendered with PyYAML, one file per kind
under `.github/workflows/`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from github_repo_automator.orchestrator.errors import ScaffoldError

logger = logging.getLogger(__name__)

WORKFLOWS_DIR = Path(".github") / "workflows"
WORKFLOW_KINDS: tuple[str, ...] = ("ci", "deploy", "custom")

_CHECKOUT_STEP: dict[str, Any] = {"name": "Check out", "uses": "actions/checkout@v4"}


def _ci(branch: str) -> dict[str, Any]:
    return {
        "name": "CI",
        "on": {
            "push": {"branches": [branch]},
            "pull_request": {"branches": [branch]},
        },
        "jobs": {
            "build": {
                "runs-on": "ubuntu-latest",
                "steps": [
                    _CHECKOUT_STEP,
                    {"name": "Build", "run": 'echo "Add your build commands here"'},
                    {"name": "Test", "run": 'echo "Add your test commands here"'},
                ],
            }
        },
    }


def _deploy(branch: str) -> dict[str, Any]:
    return {
        "name": "Deploy",
        "on": {
            "push": {"branches": [branch], "tags": ["v*"]},
            "workflow_dispatch": None,
        },
        "jobs": {
            "deploy": {
                "runs-on": "ubuntu-latest",
                "environment": "production",
                "steps": [
                    _CHECKOUT_STEP,
                    {"name": "Deploy", "run": 'echo "Add your deployment commands here"'},
                ],
            }
        },
    }


def _custom(branch: str) -> dict[str, Any]:
    return {
        "name": "Custom",
        "on": {"workflow_dispatch": None},
        "jobs": {
            "run": {
                "runs-on": "ubuntu-latest",
                "steps": [
                    _CHECKOUT_STEP,
                    {"name": "Run", "run": f'echo "Running on {branch}"'},
                ],
            }
        },
    }


_BUILDERS = {"ci": _ci, "deploy": _deploy, "custom": _custom}


def render_workflow(kind: str, *, branch: str = "main") -> str:
    builder = _BUILDERS.get(kind)
    if builder is None:
        raise ScaffoldError(
            f"unknown workflow type {kind!r} (expected one of: {', '.join(WORKFLOW_KINDS)})"
        )
    return yaml.safe_dump(builder(branch), sort_keys=False, default_flow_style=False)


def write_workflow(directory: Path, kind: str, *, branch: str = "main") -> Path:
    """Write `.github/workflows/<kind>.yml`, replacing a previous scaffold of the same kind."""

    content = render_workflow(kind, branch=branch)
    path = directory / WORKFLOWS_DIR / f"{kind}.yml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.info("Workflow written", extra={"kind": kind, "path": str(path)})
    return path

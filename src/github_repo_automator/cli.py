"""Console entrypoint.

The argument parser and command dispatch live in `github_repo_automator.orchestrator.main`.
"""

from __future__ import annotations

from github_repo_automator.orchestrator.main import main

__all__ = ["main"]


if __name__ == "__main__":
    raise SystemExit(main())

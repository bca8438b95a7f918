"""Local repository orchestration.

This package contains the CLI, settings, logging setup, the git and GitHub
leaf layers, and the workflows that sequence them.
"""

__all__: list[str] = []

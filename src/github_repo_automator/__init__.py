"""GitHub Repository Automator.

Turns a local directory into a pushed GitHub repository and wraps the everyday
follow-up chores:
- commit and push pending changes
- branch create/list/switch
- issue and pull request creation
- `.gitignore`, `LICENSE` and workflow scaffolding
"""

__version__ = "0.1.0"

from github_repo_automator.orchestrator.config import AutomatorSettings

__all__ = ["__version__", "AutomatorSettings"]

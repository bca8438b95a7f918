"""Workflows that sequence git and GitHub calls.

Each workflow runs its steps through `policy.StepRunner`, which looks up the
step in an explicit table to decide whether a failure aborts the run (FATAL)
or is reported and skipped (SOFT).
"""

from github_repo_automator.orchestrator.workflow.collaboration import (
    BranchManager,
    IssueCreator,
    PullRequestCreator,
)
from github_repo_automator.orchestrator.workflow.configure import Configurator
from github_repo_automator.orchestrator.workflow.initialize import (
    InitRequest,
    InitResult,
    RepositoryInitializer,
)
from github_repo_automator.orchestrator.workflow.resolver import RepositoryInfoResolver
from github_repo_automator.orchestrator.workflow.scaffolding import Scaffolder
from github_repo_automator.orchestrator.workflow.synchronize import (
    RepositorySynchronizer,
    SyncResult,
)

__all__ = [
    "BranchManager",
    "Configurator",
    "InitRequest",
    "InitResult",
    "IssueCreator",
    "PullRequestCreator",
    "RepositoryInfoResolver",
    "RepositoryInitializer",
    "RepositorySynchronizer",
    "Scaffolder",
    "SyncResult",
]

"""Error types shared across the automator.

Leaf layers (git runner, GitHub client, credential store, prompts, scaffolding)
only normalize failures into readable text. Whether a failure aborts a workflow
is decided by the step policy tables in `workflow.policy`.
"""

from __future__ import annotations


class AutomatorError(Exception):
    """Base class for every error the automator knows how to report."""


class CommandError(AutomatorError):
    """An external command exited non-zero or could not be launched."""

    def __init__(
        self,
        message: str,
        *,
        command: list[str] | None = None,
        return_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.command = command or []
        self.return_code = return_code


class RemoteError(AutomatorError):
    """A GitHub API call failed (non-2xx response or transport failure)."""

    def __init__(self, status_code: int | None, body: str) -> None:
        self.status_code = status_code
        self.body = body
        if status_code is None:
            super().__init__(body)
        else:
            super().__init__(f"{status_code} {body}".strip())


class CredentialsError(AutomatorError):
    """Stored credentials are missing, incomplete or unreadable."""


class RepositoryIdentityError(AutomatorError):
    """A remote URL does not point at a GitHub repository."""


class PromptUnavailable(AutomatorError):
    """A required value was supplied neither by flag nor by prompt."""


class ScaffoldError(AutomatorError):
    """A scaffolded file could not be produced."""


class StepError(AutomatorError):
    """A workflow step failed; carries the step and the operator-facing message."""

    def __init__(self, step: str, message: str) -> None:
        super().__init__(message)
        self.step = step
        self.message = message


class FatalStepError(StepError):
    """Aborts the current workflow run."""


class SoftStepError(StepError):
    """Reported to the operator; the workflow continues with the next step."""

"""Operator-facing progress output.

Messages are printed with `click.secho` and every step outcome is kept so a
workflow can finish with a summary of what failed.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import click


@dataclass(frozen=True, slots=True)
class StepOutcome:
    step: str
    ok: bool
    message: str


class Reporter:
    def __init__(self, echo: Callable[..., Any] | None = None) -> None:
        self._echo = echo or click.secho
        self.outcomes: list[StepOutcome] = []

    def success(self, step: str, message: str) -> None:
        self.outcomes.append(StepOutcome(step=step, ok=True, message=message))
        self._echo(message, fg="green")

    def failure(self, step: str, message: str) -> None:
        self.outcomes.append(StepOutcome(step=step, ok=False, message=message))
        self._echo(message, fg="red", err=True)

    def notice(self, message: str) -> None:
        self._echo(message, fg="yellow")

    def info(self, message: str) -> None:
        self._echo(message)

    def headline(self, message: str) -> None:
        self._echo(message, fg="cyan", bold=True)

    @property
    def failures(self) -> list[StepOutcome]:
        return [o for o in self.outcomes if not o.ok]

    def summary(self) -> None:
        failed = self.failures
        if not failed:
            return
        self._echo(f"Finished with {len(failed)} problem(s):", fg="yellow", bold=True)
        for outcome in failed:
            self._echo(f"  - {outcome.message}", fg="yellow")

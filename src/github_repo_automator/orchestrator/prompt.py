"""Operator prompts and the flag-or-prompt value resolver."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

import click

from github_repo_automator.orchestrator.errors import PromptUnavailable

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Prompter:
    """Ask the operator for values.

    With `interactive=False` (the `--no-input` flag) every question is answered
    with its default, and a question without a default raises
    `PromptUnavailable`.
    """

    def __init__(self, *, interactive: bool = True) -> None:
        self.interactive = interactive

    def ask(self, label: str, default: str | None = None) -> str:
        if not self.interactive:
            if default is None:
                raise PromptUnavailable(f"{label} is required (prompting is disabled)")
            return default
        try:
            value = click.prompt(label, default=default, type=str, show_default=bool(default))
        except click.Abort as e:
            if default is None:
                raise PromptUnavailable(f"{label} was not provided") from e
            logger.warning("Prompt aborted; using default", extra={"label": label})
            return default
        return str(value)

    def ask_secret_with_confirmation(self, label: str) -> str:
        if not self.interactive:
            raise PromptUnavailable(f"{label} is required (prompting is disabled)")
        try:
            value = click.prompt(
                label,
                hide_input=True,
                confirmation_prompt="Confirm",
                type=str,
            )
        except click.Abort as e:
            raise PromptUnavailable(f"{label} was not provided") from e
        return str(value)

    def choose(self, label: str, options: Sequence[str], default_index: int = 0) -> int:
        if not options:
            raise ValueError("choose() needs at least one option")
        if not 0 <= default_index < len(options):
            raise ValueError("default_index is out of range")
        if not self.interactive:
            return default_index
        try:
            picked = click.prompt(
                label,
                type=click.Choice(list(options)),
                default=options[default_index],
                show_choices=True,
            )
        except click.Abort:
            logger.warning("Prompt aborted; using default", extra={"label": label})
            return default_index
        return list(options).index(picked)


def resolve(
    explicit: T | None,
    *,
    label: str,
    default: str | None,
    prompter: Prompter,
    parse: Callable[[str], T],
) -> T:
    """Use the flag value when given, otherwise prompt (with a default) and parse."""

    if explicit is not None:
        return explicit
    return parse(prompter.ask(label, default))


def resolve_text(
    explicit: str | None, *, label: str, default: str | None, prompter: Prompter
) -> str:
    return resolve(explicit, label=label, default=default, prompter=prompter, parse=str.strip)


def parse_labels(value: str) -> tuple[str, ...]:
    """Split a comma separated label list, dropping blanks and duplicates."""

    labels: dict[str, None] = {}
    for part in value.split(","):
        name = part.strip()
        if name:
            labels.setdefault(name)
    return tuple(labels)

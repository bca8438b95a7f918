"""Unit tests for prompts and flag-or-prompt resolution."""

from __future__ import annotations

from unittest.mock import Mock

import click
import pytest

from github_repo_automator.orchestrator.errors import PromptUnavailable
from github_repo_automator.orchestrator.prompt import (
    Prompter,
    parse_labels,
    resolve,
    resolve_text,
)


def test_explicit_value_wins_without_prompting() -> None:
    prompter = Mock(spec=Prompter)

    assert resolve_text("demo", label="Name", default="other", prompter=prompter) == "demo"
    prompter.ask.assert_not_called()


def test_resolve_prompts_and_parses() -> None:
    prompter = Mock(spec=Prompter)
    prompter.ask.return_value = "bug, docs"

    labels = resolve(None, label="Labels", default="", prompter=prompter, parse=parse_labels)

    assert labels == ("bug", "docs")
    prompter.ask.assert_called_once_with("Labels", "")


def test_non_interactive_uses_default() -> None:
    prompter = Prompter(interactive=False)

    assert prompter.ask("Commit message", "Update") == "Update"
    assert prompter.choose("Visibility", ["public", "private"], 1) == 1


def test_non_interactive_without_default_raises() -> None:
    with pytest.raises(PromptUnavailable):
        Prompter(interactive=False).ask("Issue title")

    with pytest.raises(PromptUnavailable):
        Prompter(interactive=False).ask_secret_with_confirmation("Token")


def test_interactive_ask_uses_click(monkeypatch: pytest.MonkeyPatch) -> None:
    fake_prompt = Mock(return_value="typed")
    monkeypatch.setattr(click, "prompt", fake_prompt)

    assert Prompter().ask("Repository name", "demo") == "typed"
    assert fake_prompt.call_args.kwargs["default"] == "demo"


def test_aborted_prompt_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(click, "prompt", Mock(side_effect=click.Abort()))

    assert Prompter().ask("Repository name", "demo") == "demo"
    with pytest.raises(PromptUnavailable):
        Prompter().ask("Issue title")


def test_choose_returns_index_of_picked_option(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(click, "prompt", Mock(return_value="private"))

    assert Prompter().choose("Visibility", ["public", "private"]) == 1


def test_secret_prompt_asks_for_confirmation(monkeypatch: pytest.MonkeyPatch) -> None:
    fake_prompt = Mock(return_value="s3cret")
    monkeypatch.setattr(click, "prompt", fake_prompt)

    assert Prompter().ask_secret_with_confirmation("Token") == "s3cret"
    assert fake_prompt.call_args.kwargs["hide_input"] is True
    assert fake_prompt.call_args.kwargs["confirmation_prompt"]


def test_parse_labels_drops_blanks_and_duplicates() -> None:
    assert parse_labels(" bug,, docs ,bug ") == ("bug", "docs")
    assert parse_labels("") == ()

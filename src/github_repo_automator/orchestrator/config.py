"""Runtime settings for the automator.

Settings are loaded from:
- environment variables
- and a local `.env` file (if present)

GitHub credentials are deliberately *not* settings: they are owned by the
credential store (`ghauto config`) so that one token serves every directory.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_credentials_path() -> Path:
    return Path.home() / ".ghauto" / "config.json"


class AutomatorSettings(BaseSettings):
    """Settings for the automator CLI.

    Environment variables:
    - LOG_LEVEL              (optional)
    - GITHUB_API_URL         (optional)
    - GHAUTO_CONFIG_PATH     (optional)
    - GHAUTO_GIT             (optional)
    - GHAUTO_DEFAULT_BRANCH  (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `AutomatorSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="WARNING",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )
    github_api_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_API_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )
    credentials_path: Path = Field(
        default_factory=_default_credentials_path,
        validation_alias="GHAUTO_CONFIG_PATH",
        description="File where the token, username and defaults are persisted",
    )
    git_binary: str = Field(
        default="git",
        validation_alias="GHAUTO_GIT",
        description="Version control executable",
    )
    default_branch: str = Field(
        default="main",
        validation_alias="GHAUTO_DEFAULT_BRANCH",
        description=(
            "Branch used when the stored credentials do not name one; also the "
            "default pull request base"
        ),
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("credentials_path")
    @classmethod
    def _expand_user(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("default_branch")
    @classmethod
    def _require_branch(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("GHAUTO_DEFAULT_BRANCH must not be empty")
        return value.strip()

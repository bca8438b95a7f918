"""Persisted GitHub credentials and per-user defaults."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from github_repo_automator.orchestrator.errors import CredentialsError

logger = logging.getLogger(__name__)


class Credentials(BaseModel):
    """Token, username and defaults written by `ghauto config`."""

    token: str = Field(default="")
    username: str = Field(default="")
    default_branch: str | None = Field(default=None)
    default_license: str | None = Field(default=None)

    @property
    def is_complete(self) -> bool:
        """Both token and username are set; required before any GitHub call."""

        return bool(self.token.strip()) and bool(self.username.strip())


class CredentialStore:
    """JSON-file backed credential record at a fixed per-user path."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Credentials | None:
        """Return the stored credentials, or None when nothing was saved yet.

        Raises:
            CredentialsError: the file exists but cannot be read or parsed.
        """

        if not self._path.exists():
            logger.debug("No credential file", extra={"path": str(self._path)})
            return None

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise CredentialsError(f"cannot read {self._path}: {e}") from e

        if not isinstance(raw, dict):
            raise CredentialsError(f"{self._path} does not contain a JSON object")

        try:
            return Credentials.model_validate(raw)
        except ValidationError as e:
            raise CredentialsError(f"{self._path} has an unexpected shape: {e}") from e

    def save(self, credentials: Credentials) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(credentials.model_dump(mode="json"), indent=2, ensure_ascii=False)

        # The file holds a token: create it owner-only before any content lands.
        fd = os.open(self._path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload + "\n")
        os.chmod(self._path, 0o600)
        logger.info("Credentials saved", extra={"path": str(self._path)})

"""Blocking runner for external commands."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from github_repo_automator.orchestrator.errors import CommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of a single command."""

    exit_success: bool
    stdout: bytes
    stderr: bytes

    @property
    def stdout_text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")


class CommandRunner:
    """Run a program with arguments and capture its output.

    A non-zero exit status, or a program that cannot be launched, raises
    `CommandError` whose message is the trimmed stderr text.
    """

    def run(self, program: str, args: list[str], *, cwd: Path | None = None) -> CommandResult:
        command = [program, *args]
        logger.debug("Running command", extra={"command": command, "cwd": str(cwd or ".")})

        try:
            process = subprocess.run(
                command,
                cwd=cwd,
                capture_output=True,
                check=False,
            )
        except (FileNotFoundError, PermissionError) as e:
            raise CommandError(
                f"could not launch {program!r}: {e.strerror or e}",
                command=command,
            ) from e

        result = CommandResult(
            exit_success=process.returncode == 0,
            stdout=process.stdout or b"",
            stderr=process.stderr or b"",
        )
        logger.debug(
            "Command finished",
            extra={"command": command, "return_code": process.returncode},
        )

        if not result.exit_success:
            message = result.stderr_text.strip()
            if not message:
                # Some git failures (e.g. "nothing to commit") only write to stdout.
                message = result.stdout_text.strip()
            if not message:
                message = f"{program} exited with status {process.returncode}"
            raise CommandError(message, command=command, return_code=process.returncode)

        return result

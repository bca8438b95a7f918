"""Structured logging for the CLI.

One JSON object per line on stderr, so log output never interleaves with the
operator messages printed on stdout. Fields the workflows attach through
`extra=` that identify a step or a git invocation (`step`, `severity`,
`command`, `return_code`, `cwd`) are promoted to top-level keys so a failed run
can be filtered with a single `jq` expression; everything else lands under
`extra`.
"""

from __future__ import annotations

import json
import logging
import shlex
import sys
from datetime import UTC, datetime
from typing import Any

PROMOTED_FIELDS: tuple[str, ...] = ("step", "severity", "command", "return_code", "cwd")

# Attributes every LogRecord carries; anything else came from `extra=`.
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime"}


def _plain(value: Any) -> Any:
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return shlex.join(value)
    return value


class JsonFormatter(logging.Formatter):
    """Render a log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra: dict[str, Any] = {}
        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS or key.startswith("_"):
                continue
            if key in PROMOTED_FIELDS:
                payload[key] = _plain(value)
            else:
                extra[key] = value
        if extra:
            payload["extra"] = extra

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str) -> logging.Handler:
    """Send JSON records at `level` and above to stderr; returns the installed handler.

    Re-configuring replaces the previous handler. urllib3 connection chatter is
    only shown at DEBUG.
    """

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)
    root.setLevel(level.upper())

    logging.getLogger("urllib3").setLevel(max(root.level, logging.INFO))
    return handler

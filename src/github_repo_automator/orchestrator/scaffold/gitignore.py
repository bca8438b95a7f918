from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

GITIGNORE_FILENAME = ".gitignore"


def template_marker(template: str) -> str:
    return f"# ---- {template} template (github/gitignore) ----"


def merge_gitignore(directory: Path, template: str, source: str) -> Path:
    """Write a GitHub gitignore template into `directory`.

    An existing file is never rewritten: the template is appended below a marker
    comment, so the original bytes stay an exact prefix of the result.
    """

    path = directory / GITIGNORE_FILENAME
    body = source if source.endswith("\n") else source + "\n"

    if not path.exists():
        path.write_text(body, encoding="utf-8")
        logger.info("Created .gitignore", extra={"template": template})
        return path

    existing = path.read_bytes()
    separator = b"" if not existing or existing.endswith(b"\n") else b"\n"
    addition = f"\n{template_marker(template)}\n{body}".encode()
    with path.open("ab") as f:
        f.write(separator + addition)
    logger.info("Appended template to existing .gitignore", extra={"template": template})
    return path

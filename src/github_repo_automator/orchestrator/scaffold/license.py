from __future__ import annotations

from pathlib import Path

LICENSE_FILENAME = "LICENSE"


def write_license(directory: Path, text: str) -> Path:
    """Write the license text verbatim to `LICENSE`, replacing any previous file."""

    path = directory / LICENSE_FILENAME
    path.write_text(text, encoding="utf-8")
    return path

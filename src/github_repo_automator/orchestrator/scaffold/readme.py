from __future__ import annotations

from pathlib import Path

from github_repo_automator.orchestrator.descriptors import RepositoryDescriptor

README_FILENAME = "README.md"


def render_readme(descriptor: RepositoryDescriptor) -> str:
    if descriptor.description.strip():
        return f"# {descriptor.name}\n\n{descriptor.description.strip()}\n"
    return f"# {descriptor.name}\n"


def write_readme(directory: Path, descriptor: RepositoryDescriptor) -> bool:
    """Create README.md from the descriptor. Returns False when one already exists."""

    path = directory / README_FILENAME
    if path.exists():
        return False
    path.write_text(render_readme(descriptor), encoding="utf-8")
    return True

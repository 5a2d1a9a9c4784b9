"""README block replacement for the compressed index."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Tuple

from skill_catalog.errors import CatalogError, ReadmeMarkersNotFound


def index_markers(title: str) -> Tuple[str, str]:
    """BEGIN/END HTML comment markers for an index title."""
    tag = title.upper()
    return (
        f"<!-- BEGIN {tag} COMPRESSED INDEX -->",
        f"<!-- END {tag} COMPRESSED INDEX -->",
    )


def replace_index_block(text: str, compressed: str, title: str) -> str:
    """
    Replace every marked index block in ``text`` with ``compressed``.

    Raises:
        ReadmeMarkersNotFound: If no BEGIN...END block exists
    """
    start, end = index_markers(title)
    pattern = re.compile(re.escape(start) + r".*?" + re.escape(end), re.S)

    if not pattern.search(text):
        raise ReadmeMarkersNotFound(
            f"README markers not found: add BEGIN/END {title.upper()} COMPRESSED INDEX"
        )

    replacement = f"{start}\n```markdown\n{compressed.strip()}\n```\n{end}"
    return pattern.sub(lambda _: replacement, text)


def update_readme(readme_path: Path, compressed: str, title: str) -> None:
    """Rewrite the index block inside a README file in place."""
    if not readme_path.exists():
        raise CatalogError(f"README not found: {readme_path}", path=readme_path)

    text = readme_path.read_text(encoding="utf-8")
    try:
        updated = replace_index_block(text, compressed, title)
    except ReadmeMarkersNotFound as e:
        e.path = readme_path
        raise
    readme_path.write_text(updated, encoding="utf-8")

"""
Frontmatter parsing for agent and skill markdown documents.

A document opens with a ``---`` line, a YAML mapping, and a closing ``---``
line. Everything after the closing marker is the body.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from skill_catalog.errors import FrontmatterError


FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)", re.DOTALL
)
NAME_LINE_PATTERN = re.compile(r"^name:[ \t]*(.*?)[ \t]*\r?$", re.MULTILINE)


def split_frontmatter(text: str, source: Optional[Path] = None) -> Tuple[Dict[str, Any], str]:
    """
    Split a markdown document into its frontmatter mapping and body.

    Args:
        text: Full document text
        source: Path used in error messages

    Returns:
        (frontmatter mapping, body text)

    Raises:
        FrontmatterError: If markers are missing, the YAML is invalid,
            or the YAML is not a mapping
    """
    where = f" in {source}" if source else ""

    # Tolerate a UTF-8 BOM written by some editors
    text = text.lstrip("\ufeff")

    match = FRONTMATTER_PATTERN.match(text)
    if not match:
        raise FrontmatterError(f"No YAML frontmatter found{where}", path=source)

    try:
        data = yaml.safe_load(match.group(1) or "")
    except yaml.YAMLError as e:
        raise FrontmatterError(f"Invalid YAML frontmatter{where}: {e}", path=source)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontmatterError(
            f"Frontmatter must be a mapping{where}, got {type(data).__name__}",
            path=source,
        )

    return data, text[match.end():]


def read_name_line(path: Path) -> Optional[str]:
    """
    Return the value of the first ``name:`` line in a document.

    This does not parse YAML; it is the lightweight lookup used when only the
    name is needed or when the frontmatter block is malformed.
    """
    match = NAME_LINE_PATTERN.search(path.read_text(encoding="utf-8"))
    if not match:
        return None
    return match.group(1)

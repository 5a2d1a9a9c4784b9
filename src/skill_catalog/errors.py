"""Exception hierarchy for the skill catalog toolkit."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class CatalogError(Exception):
    """Base class for all catalog failures."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class FrontmatterError(CatalogError):
    """Raised when a document's YAML frontmatter is missing or invalid."""
    pass


class ManifestError(CatalogError):
    """Raised when plugin.json or marketplace.json cannot be loaded."""
    pass


class IndexGenerationError(CatalogError):
    """Raised when the compressed skills index cannot be built."""
    pass


class RoutesLoadError(CatalogError):
    """Raised when a category routes file is invalid."""
    pass


class ReadmeMarkersNotFound(CatalogError):
    """Raised when README.md lacks the compressed index markers."""
    pass

"""
Skill Catalog - tooling for agent/skill plugin repositories.

Loads markdown agents and skills (YAML frontmatter + body) together with the
.claude-plugin manifests that register them, validates the two against each
other, and generates the compressed skills index used for routing.

This package re-exports the main entry points for convenience.
"""

from skill_catalog.catalog import (
    Corpus,
    Document,
    DocumentKind,
    PluginManifest,
    ValidationReport,
)
from skill_catalog.errors import CatalogError
from skill_catalog.index import build_index, render_index, update_readme
from skill_catalog.validation import validate_marketplace

__version__ = "0.1.0"

__all__ = [
    "Corpus",
    "Document",
    "DocumentKind",
    "PluginManifest",
    "ValidationReport",
    "CatalogError",
    "build_index",
    "render_index",
    "update_readme",
    "validate_marketplace",
]

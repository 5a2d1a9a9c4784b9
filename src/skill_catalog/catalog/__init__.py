"""
Catalog Package - models and loaders for the agent/skill corpus.

This package provides:
- Frontmatter parsing for markdown documents
- Pydantic models for plugin manifests, documents and validation reports
- Corpus: reference resolution and document discovery under a repo root
"""

from .frontmatter import read_name_line, split_frontmatter
from .manifest import (
    load_manifest_json,
    load_marketplace_manifest,
    load_plugin_manifest,
    normalize_ref,
)
from .models import (
    AgentsMode,
    Document,
    DocumentKind,
    Issue,
    MarketplaceManifest,
    PluginManifest,
    Severity,
    ValidationReport,
)
from .corpus import Corpus, extract_skill_references

__all__ = [
    # Frontmatter
    "read_name_line",
    "split_frontmatter",
    # Manifests
    "load_manifest_json",
    "load_marketplace_manifest",
    "load_plugin_manifest",
    "normalize_ref",
    # Models
    "AgentsMode",
    "Document",
    "DocumentKind",
    "Issue",
    "MarketplaceManifest",
    "PluginManifest",
    "Severity",
    "ValidationReport",
    # Corpus
    "Corpus",
    "extract_skill_references",
]

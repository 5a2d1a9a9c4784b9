"""
Manifest loading for .claude-plugin/plugin.json and marketplace.json.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from skill_catalog.errors import ManifestError

from .models import MarketplaceManifest, PluginManifest


def normalize_ref(ref: str) -> str:
    """Strip a leading ``./`` from a manifest path reference."""
    return ref[2:] if ref.startswith("./") else ref


def load_manifest_json(path: Path) -> Dict[str, Any]:
    """
    Load a manifest file as a JSON object.

    Raises:
        ManifestError: If the file is missing, not valid JSON, or not an object
    """
    if not path.exists():
        raise ManifestError(f"Manifest not found: {path}", path=path)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid JSON syntax in {path.name}: {e}", path=path)

    if not isinstance(data, dict):
        raise ManifestError(
            f"{path.name} must contain a JSON object, got {type(data).__name__}",
            path=path,
        )
    return data


def _format_validation_error(e: ValidationError) -> str:
    parts = []
    for error in e.errors():
        loc = ".".join(str(x) for x in error["loc"])
        parts.append(f"{loc}: {error['msg']}")
    return "; ".join(parts)


def load_plugin_manifest(path: Path) -> PluginManifest:
    """Load and validate plugin.json."""
    data = load_manifest_json(path)
    try:
        return PluginManifest.model_validate(data)
    except ValidationError as e:
        raise ManifestError(
            f"Invalid plugin manifest {path.name}: {_format_validation_error(e)}",
            path=path,
        )


def load_marketplace_manifest(path: Path) -> MarketplaceManifest:
    """Load and validate marketplace.json."""
    data = load_manifest_json(path)
    try:
        return MarketplaceManifest.model_validate(data)
    except ValidationError as e:
        raise ManifestError(
            f"Invalid marketplace manifest {path.name}: {_format_validation_error(e)}",
            path=path,
        )

"""
Category routes for the compressed skills index.

A route maps glob patterns over a skill reference (``skills/<group>/<skill>``,
leading ``./`` stripped) to an index category. Routes are tried in order and
the first match wins, so narrow patterns must precede broad ones.
"""

from __future__ import annotations

from fnmatch import fnmatchcase
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from skill_catalog.catalog import normalize_ref
from skill_catalog.errors import RoutesLoadError


class CategoryRoute(BaseModel):
    """Glob patterns that place a skill in a category."""
    model_config = ConfigDict(extra="forbid")

    category: str = Field(..., min_length=1, max_length=64)
    patterns: List[str] = Field(..., min_length=1)

    @field_validator("patterns")
    @classmethod
    def normalize_patterns(cls, v: List[str]) -> List[str]:
        return [normalize_ref(p).rstrip("/") for p in v]

    def matches(self, ref: str) -> bool:
        clean = normalize_ref(ref).rstrip("/")
        return any(fnmatchcase(clean, pattern) for pattern in self.patterns)


class RouteTable(BaseModel):
    """
    Ordered routes plus the order categories appear in the rendered index.

    ``order`` defaults to the order categories first appear in ``routes``.
    """
    model_config = ConfigDict(extra="forbid")

    routes: List[CategoryRoute] = Field(..., min_length=1)
    order: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_order(self) -> "RouteTable":
        known = []
        for route in self.routes:
            if route.category not in known:
                known.append(route.category)

        if not self.order:
            self.order = known
            return self

        unknown = [c for c in self.order if c not in known]
        if unknown:
            raise ValueError(f"Order names unknown categories: {unknown}")
        missing = [c for c in known if c not in self.order]
        if missing:
            raise ValueError(f"Order is missing categories: {missing}")
        if len(set(self.order)) != len(self.order):
            raise ValueError("Order lists a category more than once")
        return self

    def categorize(self, ref: str) -> Optional[str]:
        """Category for a skill reference, or None when no route matches."""
        for route in self.routes:
            if route.matches(ref):
                return route.category
        return None


DEFAULT_ROUTES: List[CategoryRoute] = [
    CategoryRoute(category="csharp", patterns=["skills/csharp/*"]),
    CategoryRoute(category="aspnetcore-web", patterns=["skills/aspire/*", "skills/aspnetcore/*"]),
    CategoryRoute(category="data", patterns=["skills/data/*"]),
    CategoryRoute(category="di-config", patterns=["skills/microsoft-extensions/*"]),
    CategoryRoute(
        category="quality-gates",
        patterns=["skills/dotnet/slopwatch", "skills/testing/crap-analysis"],
    ),
    CategoryRoute(category="testing", patterns=["skills/testing/*", "skills/playwright/*"]),
    CategoryRoute(category="dotnet", patterns=["skills/dotnet/*"]),
    CategoryRoute(category="meta", patterns=["skills/meta/*"]),
]

DEFAULT_CATEGORY_ORDER: List[str] = [
    "csharp",
    "aspnetcore-web",
    "data",
    "di-config",
    "testing",
    "dotnet",
    "quality-gates",
    "meta",
]


def default_route_table() -> RouteTable:
    return RouteTable(
        routes=[route.model_copy(deep=True) for route in DEFAULT_ROUTES],
        order=list(DEFAULT_CATEGORY_ORDER),
    )


def load_routes(path: Path) -> RouteTable:
    """
    Load a route table from YAML.

    Format:
        routes:
          - category: csharp
            patterns: ["skills/csharp/*"]
        order: [csharp]          # optional

    Raises:
        RoutesLoadError: If the file is missing or invalid
    """
    if not path.exists():
        raise RoutesLoadError(f"Routes file not found: {path}", path=path)

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise RoutesLoadError(f"Invalid YAML in {path}: {e}", path=path)

    if not isinstance(data, dict):
        raise RoutesLoadError(
            f"Routes file must be a mapping, got {type(data).__name__}", path=path
        )

    try:
        return RouteTable.model_validate(data)
    except ValidationError as e:
        raise RoutesLoadError(f"Invalid routes in {path}: {e}", path=path)

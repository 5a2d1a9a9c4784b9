"""
Index Package - compressed skills index generation.

This package provides:
- CategoryRoute / RouteTable: glob routing of skill references to categories
- build_index / render_index: the compressed index text
- update_readme: splice the index into README.md between markers
"""

from .routes import (
    CategoryRoute,
    RouteTable,
    DEFAULT_ROUTES,
    DEFAULT_CATEGORY_ORDER,
    default_route_table,
    load_routes,
)
from .generator import (
    SkillIndex,
    build_index,
    render_index,
    DEFAULT_TITLE,
)
from .readme import index_markers, replace_index_block, update_readme

__all__ = [
    # Routes
    "CategoryRoute",
    "RouteTable",
    "DEFAULT_ROUTES",
    "DEFAULT_CATEGORY_ORDER",
    "default_route_table",
    "load_routes",
    # Generator
    "SkillIndex",
    "build_index",
    "render_index",
    "DEFAULT_TITLE",
    # README
    "index_markers",
    "replace_index_block",
    "update_readme",
]

"""
Skill Catalog CLI - Command-line interface for plugin repositories.

Commands:
- validate: Check plugin.json against skill/agent files
- index: Generate the compressed skills index
- list / show: Inspect registered documents
"""

from .main import cli, app, main

__all__ = ["cli", "app", "main"]

"""Pytest configuration and fixtures."""
import json
import os
from pathlib import Path

import pytest

# Set test environment variables
os.environ["SKILL_CATALOG_ENV"] = "test"
os.environ["SKILL_CATALOG_LOG_FORMAT"] = "text"


README_TEMPLATE = """# dotnet-skills

Intro text.

<!-- BEGIN DOTNET-SKILLS COMPRESSED INDEX -->
```markdown
stale index
```
<!-- END DOTNET-SKILLS COMPRESSED INDEX -->

Footer text.
"""


class PluginRepo:
    """Builds a small plugin repository on disk for tests."""

    def __init__(self, root: Path):
        self.root = root
        self.plugin_dir = root / ".claude-plugin"
        self.plugin_dir.mkdir(parents=True, exist_ok=True)

    def write_skill(self, ref: str, name: str | None, description: str = "A skill.", body: str = "") -> Path:
        path = self.root / ref / "SKILL.md"
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = ["---"]
        if name is not None:
            lines.append(f"name: {name}")
        if description:
            lines.append(f"description: {description}")
        lines.append("---")
        path.write_text("\n".join(lines) + "\n\n" + body, encoding="utf-8")
        return path

    def write_agent(self, stem: str, name: str, description: str = "An agent.", model: str | None = None, body: str = "") -> Path:
        path = self.root / "agents" / f"{stem}.md"
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = ["---", f"name: {name}", f"description: {description}"]
        if model:
            lines.append(f"model: {model}")
        lines.append("---")
        path.write_text("\n".join(lines) + "\n\n" + body, encoding="utf-8")
        return path

    def write_plugin(self, **fields) -> Path:
        path = self.plugin_dir / "plugin.json"
        path.write_text(json.dumps(fields, indent=2), encoding="utf-8")
        return path

    def write_marketplace(self, **fields) -> Path:
        path = self.plugin_dir / "marketplace.json"
        path.write_text(json.dumps(fields, indent=2), encoding="utf-8")
        return path

    def write_readme(self, text: str = README_TEMPLATE) -> Path:
        path = self.root / "README.md"
        path.write_text(text, encoding="utf-8")
        return path


SKILL_REFS = [
    "./skills/csharp/coding-standards",
    "./skills/testing/crap-analysis",
    "./skills/testing/snapshot-testing",
    "./skills/dotnet/slopwatch",
    "./skills/dotnet/project-structure",
    "./skills/meta/marketplace-publishing",
]

AGENT_REFS = [
    "./agents/akka-net-specialist",
    "./agents/dotnet-performance-analyst",
]


@pytest.fixture(autouse=True)
def _reset_settings():
    """Drop the cached settings around every test."""
    from skill_catalog.config import reset_settings

    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def plugin_repo(tmp_path) -> PluginRepo:
    """A consistent plugin repository: six skills, two agents (array mode)."""
    repo = PluginRepo(tmp_path / "dotnet-skills")

    repo.write_skill(SKILL_REFS[0], "csharp-coding-standards", "Modern C# coding standards.")
    repo.write_skill(SKILL_REFS[1], "crap-analysis", "CRAP score analysis.")
    repo.write_skill(
        SKILL_REFS[2],
        "snapshot-testing",
        "Snapshot testing with Verify.",
        body="Pair with `skill:csharp-coding-standards` for naming.\n",
    )
    repo.write_skill(SKILL_REFS[3], "slopwatch", "Detect LLM reward hacking.")
    repo.write_skill(SKILL_REFS[4], "project-structure", "Solution layout.")
    repo.write_skill(SKILL_REFS[5], "marketplace-publishing", "Publishing this marketplace.")

    repo.write_agent("akka-net-specialist", "akka-net-specialist", "Akka.NET expert.")
    repo.write_agent(
        "dotnet-performance-analyst",
        "dotnet-performance-analyst",
        "Profiles .NET code.",
        model="sonnet",
        body="See skill:crap-analysis before benchmarking.\n",
    )

    repo.write_plugin(
        name="dotnet-skills",
        version="1.2.0",
        description="Skills for .NET development",
        skills=SKILL_REFS,
        agents=AGENT_REFS,
    )
    repo.write_marketplace(
        name="dotnet-skills",
        owner={"name": "Example Maintainer"},
        plugins=[{"name": "dotnet-skills", "source": "./"}],
    )
    repo.write_readme()
    return repo


@pytest.fixture
def corpus(plugin_repo):
    """Corpus over the default plugin repository."""
    from skill_catalog.catalog import Corpus

    return Corpus(plugin_repo.root)

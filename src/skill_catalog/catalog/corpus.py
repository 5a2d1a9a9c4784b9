"""
Corpus - file-system view of an agent/skill plugin repository.

Layout:
    <root>/.claude-plugin/plugin.json
    <root>/.claude-plugin/marketplace.json
    <root>/skills/**/SKILL.md
    <root>/agents/*.md
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional

from skill_catalog.errors import CatalogError, FrontmatterError
from skill_catalog.observability import get_logger, with_document_context

from .frontmatter import split_frontmatter
from .manifest import load_plugin_manifest, normalize_ref
from .models import AgentsMode, Document, DocumentKind, PluginManifest


logger = get_logger(__name__)

SKILL_FILENAME = "SKILL.md"
SKILLS_DIRNAME = "skills"
AGENTS_DIRNAME = "agents"

# skill:<name>, optionally wrapped in backticks
SKILL_REFERENCE_PATTERN = re.compile(r"(?<![\w-])skill:`?([a-z0-9][a-z0-9-]*)")

_KNOWN_KEYS = ("name", "description", "model")


def extract_skill_references(body: str) -> List[str]:
    """Return referenced skill names in order of first appearance."""
    seen: List[str] = []
    for match in SKILL_REFERENCE_PATTERN.finditer(body):
        # Trailing hyphens belong to prose, not the name
        name = match.group(1).rstrip("-")
        if name and name not in seen:
            seen.append(name)
    return seen


class Corpus:
    """Resolves manifest references and loads documents under a repo root."""

    def __init__(self, repo_root: Path, plugin_dir: str = ".claude-plugin", readme_name: str = "README.md"):
        self.repo_root = Path(repo_root)
        self.plugin_dir = self.repo_root / plugin_dir
        self.readme_name = readme_name

    @property
    def plugin_json_path(self) -> Path:
        return self.plugin_dir / "plugin.json"

    @property
    def marketplace_json_path(self) -> Path:
        return self.plugin_dir / "marketplace.json"

    @property
    def readme_path(self) -> Path:
        return self.repo_root / self.readme_name

    @property
    def skills_dir(self) -> Path:
        return self.repo_root / SKILLS_DIRNAME

    @property
    def agents_dir(self) -> Path:
        return self.repo_root / AGENTS_DIRNAME

    def load_plugin_manifest(self) -> PluginManifest:
        return load_plugin_manifest(self.plugin_json_path)

    def relative(self, path: Path) -> str:
        """Path relative to the repo root in posix form."""
        try:
            return path.relative_to(self.repo_root).as_posix()
        except ValueError:
            return path.as_posix()

    # ------------------------------------------------------------------
    # Reference resolution
    # ------------------------------------------------------------------

    def skill_path(self, ref: str) -> Path:
        """SKILL.md path for a skills[] entry."""
        return self.repo_root / normalize_ref(ref) / SKILL_FILENAME

    def agent_path(self, ref: str) -> Path:
        """Markdown path for an agents[] entry (array mode)."""
        clean = normalize_ref(ref)
        if clean.endswith(".md"):
            return self.repo_root / clean
        return self.repo_root / f"{clean}.md"

    def agent_dir_path(self, ref: str) -> Path:
        """Directory for an agents entry in directory mode."""
        return self.repo_root / normalize_ref(ref)

    def skill_ref_for(self, skill_file: Path) -> str:
        """Manifest-style reference (``./skills/...``) for a SKILL.md file."""
        return f"./{self.relative(skill_file.parent)}"

    def agent_ref_for(self, agent_file: Path) -> str:
        """Manifest-style reference (``./agents/<name>``) for an agent file."""
        return f"./{self.relative(agent_file.with_suffix(''))}"

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def discover_skill_files(self) -> List[Path]:
        """Every SKILL.md under skills/, sorted."""
        if not self.skills_dir.is_dir():
            return []
        return sorted(self.skills_dir.rglob(SKILL_FILENAME))

    def discover_agent_files(self, directory: Optional[Path] = None) -> List[Path]:
        """Every *.md file directly inside an agents directory, sorted."""
        directory = directory or self.agents_dir
        if not directory.is_dir():
            return []
        return sorted(p for p in directory.glob("*.md") if p.is_file())

    def registered_agent_paths(self, manifest: PluginManifest) -> List[Path]:
        """Agent files registered by the manifest, for either agents mode."""
        if manifest.agents_mode is None:
            return []
        if manifest.agents_mode == AgentsMode.DIRECTORY:
            return self.discover_agent_files(self.agent_dir_path(manifest.agents))
        return [self.agent_path(ref) for ref in manifest.agents]

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_document(
        self,
        path: Path,
        kind: DocumentKind,
        source: Optional[str] = None,
    ) -> Document:
        """
        Parse a markdown document into a Document.

        Raises:
            FrontmatterError: If the frontmatter is missing or invalid
        """
        rel = self.relative(path)
        logger.debug(
            "Loading document",
            extra=with_document_context(document=rel, kind=kind.value),
        )

        try:
            text = path.read_text(encoding="utf-8")
        except (UnicodeDecodeError, OSError) as e:
            raise FrontmatterError(f"Cannot read {rel}: {e}", path=path)

        meta, body = split_frontmatter(text, source=path)

        name = meta.get("name")
        description = meta.get("description")
        model = meta.get("model")

        return Document(
            kind=kind,
            name=str(name).strip() if name is not None and str(name).strip() else None,
            description=str(description).strip() if description is not None else None,
            model=str(model) if model is not None else None,
            path=rel,
            source=source,
            extra={k: v for k, v in meta.items() if k not in _KNOWN_KEYS},
            references=extract_skill_references(body),
        )

    def load_registered_skills(self, manifest: PluginManifest) -> List[Document]:
        """
        Load every skill the manifest registers, in manifest order.

        Raises:
            CatalogError: If a registered SKILL.md is missing
            FrontmatterError: If a document's frontmatter is invalid
        """
        documents = []
        for ref in manifest.skills:
            path = self.skill_path(ref)
            if not path.is_file():
                raise CatalogError(f"Missing SKILL.md for: {ref}", path=path)
            documents.append(self.load_document(path, DocumentKind.SKILL, source=ref))
        return documents

    def load_registered_agents(self, manifest: PluginManifest) -> List[Document]:
        """Load every agent the manifest registers (either agents mode)."""
        documents = []
        for path in self.registered_agent_paths(manifest):
            if not path.is_file():
                raise CatalogError(f"Missing agent file: {self.relative(path)}", path=path)
            documents.append(
                self.load_document(path, DocumentKind.AGENT, source=self.agent_ref_for(path))
            )
        return documents

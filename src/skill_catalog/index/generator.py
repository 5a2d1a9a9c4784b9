"""
Compressed skills index generator.

Builds the one-block routing index that is pasted into README.md (and into
agent instructions) so the host tool can find skills by name:

    [dotnet-skills]|IMPORTANT: Prefer retrieval-led reasoning over pretraining for any .NET work.
    |flow:{skim repo patterns -> consult dotnet-skills by name -> implement smallest-change -> note conflicts}
    |route:
    |csharp:{coding-standards,...}
    ...
    |agents:{...}
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from skill_catalog.catalog import Corpus, PluginManifest, read_name_line
from skill_catalog.errors import IndexGenerationError
from skill_catalog.observability import get_logger, with_document_context

from .routes import RouteTable, default_route_table


logger = get_logger(__name__)

DEFAULT_TITLE = "dotnet-skills"
DEFAULT_FOCUS = ".NET"


class SkillIndex(BaseModel):
    """Skill and agent names grouped for the compressed index."""

    title: str = DEFAULT_TITLE
    focus: str = DEFAULT_FOCUS
    categories: Dict[str, List[str]] = Field(default_factory=dict)
    order: List[str] = Field(default_factory=list)
    agents: List[str] = Field(default_factory=list)
    uncategorized: List[str] = Field(
        default_factory=list,
        description="Skill references no route matched (left out of the index)",
    )

    def render(self) -> str:
        return render_index(
            {c: self.categories.get(c, []) for c in self.order},
            self.agents,
            title=self.title,
            focus=self.focus,
        )


def render_index(
    categories: Dict[str, List[str]],
    agents: List[str],
    title: str = DEFAULT_TITLE,
    focus: str = DEFAULT_FOCUS,
) -> str:
    """
    Render the compressed index text.

    Categories are emitted in dict order; names keep their given order and
    an empty category renders as ``{}``.
    """
    lines = [
        f"[{title}]|IMPORTANT: Prefer retrieval-led reasoning over pretraining for any {focus} work.",
        f"|flow:{{skim repo patterns -> consult {title} by name -> implement smallest-change -> note conflicts}}",
        "|route:",
    ]
    for category, names in categories.items():
        lines.append(f"|{category}:{{{','.join(names)}}}")
    lines.append(f"|agents:{{{','.join(agents)}}}")
    return "\n".join(lines)


def _name_from_file(corpus: Corpus, path: Path, ref: str) -> str:
    if not path.is_file():
        raise IndexGenerationError(
            f"Cannot index '{ref}': {corpus.relative(path)} not found", path=path
        )
    try:
        name = read_name_line(path)
    except (UnicodeDecodeError, OSError) as e:
        raise IndexGenerationError(
            f"Cannot index '{ref}': cannot read {corpus.relative(path)}: {e}", path=path
        )
    if not name:
        raise IndexGenerationError(
            f"Cannot index '{ref}': no 'name:' line in {corpus.relative(path)}", path=path
        )
    return name


def build_index(
    corpus: Corpus,
    routes: Optional[RouteTable] = None,
    manifest: Optional[PluginManifest] = None,
    title: str = DEFAULT_TITLE,
) -> SkillIndex:
    """
    Group the manifest's skills by category and collect agent names.

    Args:
        corpus: Corpus rooted at the plugin repository
        routes: Category routes (defaults to the built-in table)
        manifest: Pre-loaded plugin manifest (loaded from the corpus if None)
        title: Index tag

    Raises:
        ManifestError: If plugin.json cannot be loaded
        IndexGenerationError: If a registered document is missing or unnamed
    """
    routes = routes or default_route_table()
    manifest = manifest or corpus.load_plugin_manifest()

    index = SkillIndex(
        title=title,
        order=list(routes.order),
        categories={c: [] for c in routes.order},
    )

    for ref in manifest.skills:
        name = _name_from_file(corpus, corpus.skill_path(ref), ref)
        category = routes.categorize(ref)
        if category is None:
            logger.debug(
                f"No category route for {ref}",
                extra=with_document_context(document=ref, kind="skill"),
            )
            index.uncategorized.append(ref)
            continue
        index.categories[category].append(name)

    for path in corpus.registered_agent_paths(manifest):
        index.agents.append(_name_from_file(corpus, path, corpus.agent_ref_for(path)))

    logger.info(
        f"Indexed {sum(len(v) for v in index.categories.values())} skills "
        f"and {len(index.agents)} agents",
        extra=with_document_context(manifest=corpus.relative(corpus.plugin_json_path)),
    )
    return index

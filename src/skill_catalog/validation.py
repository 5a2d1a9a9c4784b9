"""
Marketplace Validator

Checks that .claude-plugin/plugin.json is consistent with the skill and
agent files on disk, and lints the documents it registers:

- manifest JSON syntax (fatal: checking stops)
- every skills[] entry has a SKILL.md
- every registered agent file exists (directory or array mode)
- SKILL.md / agent frontmatter parses and carries a name
- SKILL.md files and agent files missing from the manifest
- duplicate skill names and unresolved skill:<name> cross-references
"""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Optional

from skill_catalog.catalog import (
    AgentsMode,
    Corpus,
    Document,
    DocumentKind,
    PluginManifest,
    Severity,
    ValidationReport,
    load_marketplace_manifest,
    normalize_ref,
)
from skill_catalog.errors import FrontmatterError, ManifestError
from skill_catalog.observability import get_logger, with_document_context


logger = get_logger(__name__)

# Report sections, in display order
SECTION_MANIFEST = "manifest"
SECTION_SKILLS = "skills"
SECTION_AGENTS = "agents"
SECTION_UNREGISTERED_SKILLS = "unregistered-skills"
SECTION_UNREGISTERED_AGENTS = "unregistered-agents"
SECTION_LINT = "lint"


def validate_marketplace(corpus: Corpus) -> ValidationReport:
    """
    Validate a plugin repository.

    Args:
        corpus: Corpus rooted at the plugin repository

    Returns:
        ValidationReport; ``report.fatal`` is set when a manifest could not
        be loaded and no further checks ran.
    """
    report = ValidationReport()

    manifest = _load_manifests(corpus, report)
    if manifest is None:
        report.fatal = True
        return report

    report.plugin_version = manifest.version
    report.skills_registered = len(manifest.skills)

    _check_skills(corpus, manifest, report)
    _check_agents(corpus, manifest, report)
    _check_unregistered_skills(corpus, manifest, report)
    _check_unregistered_agents(corpus, manifest, report)
    _check_duplicate_names(report)
    _check_references(report)

    logger.info(
        f"Validated {len(report.skills)} skills, {len(report.agents)} agents: "
        f"{len(report.errors)} errors, {len(report.warnings)} warnings",
        extra=with_document_context(manifest=corpus.relative(corpus.plugin_json_path)),
    )
    return report


def _load_manifests(corpus: Corpus, report: ValidationReport) -> Optional[PluginManifest]:
    """Load marketplace.json then plugin.json; record a fatal error on failure."""
    try:
        load_marketplace_manifest(corpus.marketplace_json_path)
        return corpus.load_plugin_manifest()
    except ManifestError as e:
        rel = corpus.relative(e.path) if e.path else None
        logger.info(str(e), extra=with_document_context(manifest=rel))
        report.add(
            Severity.ERROR,
            "invalid-manifest",
            str(e),
            path=rel,
            section=SECTION_MANIFEST,
        )
        return None


def _load_checked(
    corpus: Corpus,
    report: ValidationReport,
    path: Path,
    kind: DocumentKind,
    source: str,
    section: str,
) -> Optional[Document]:
    """Load a document and record frontmatter problems against it."""
    rel = corpus.relative(path)
    try:
        doc = corpus.load_document(path, kind, source=source)
    except FrontmatterError as e:
        report.add(Severity.ERROR, "invalid-frontmatter", str(e), path=rel, section=section)
        return None

    if not doc.name:
        report.add(
            Severity.ERROR,
            "missing-name",
            f"Frontmatter has no 'name' field: {rel}",
            path=rel,
            section=section,
        )
    if not doc.description:
        report.add(
            Severity.WARNING,
            "missing-description",
            f"Frontmatter has no 'description' field: {rel}",
            path=rel,
            section=section,
        )
    return doc


def _check_skills(corpus: Corpus, manifest: PluginManifest, report: ValidationReport) -> None:
    for ref in manifest.skills:
        path = corpus.skill_path(ref)
        if not path.is_file():
            report.add(
                Severity.ERROR,
                "missing-skill",
                f"Missing SKILL.md for: {ref} (expected: {corpus.relative(path)})",
                path=corpus.relative(path),
                section=SECTION_SKILLS,
            )
            continue

        doc = _load_checked(corpus, report, path, DocumentKind.SKILL, ref, SECTION_SKILLS)
        if doc is not None:
            report.skills.append(doc)


def _check_agents(corpus: Corpus, manifest: PluginManifest, report: ValidationReport) -> None:
    report.agents_mode = manifest.agents_mode

    # No agents key: nothing is registered and nothing is checked
    if manifest.agents_mode is None:
        return

    if manifest.agents_mode == AgentsMode.DIRECTORY:
        report.agents_source = manifest.agents
        directory = corpus.agent_dir_path(manifest.agents)
        if not directory.is_dir():
            report.add(
                Severity.ERROR,
                "missing-agent-dir",
                f"Missing agents directory: {corpus.relative(directory)}",
                path=corpus.relative(directory),
                section=SECTION_AGENTS,
            )
            return

        files = corpus.discover_agent_files(directory)
        report.agents_registered = len(files)
        for path in files:
            doc = _load_checked(
                corpus, report, path, DocumentKind.AGENT, corpus.agent_ref_for(path), SECTION_AGENTS
            )
            if doc is not None:
                report.agents.append(doc)
        return

    report.agents_registered = len(manifest.agents)
    for ref in manifest.agents:
        path = corpus.agent_path(ref)
        if not path.is_file():
            report.add(
                Severity.ERROR,
                "missing-agent",
                f"Missing agent file: {corpus.relative(path)}",
                path=corpus.relative(path),
                section=SECTION_AGENTS,
            )
            continue

        doc = _load_checked(corpus, report, path, DocumentKind.AGENT, ref, SECTION_AGENTS)
        if doc is not None:
            report.agents.append(doc)


def _check_unregistered_skills(
    corpus: Corpus, manifest: PluginManifest, report: ValidationReport
) -> None:
    registered = {normalize_ref(ref).rstrip("/") for ref in manifest.skills}
    for skill_file in corpus.discover_skill_files():
        ref = corpus.skill_ref_for(skill_file)
        if normalize_ref(ref) not in registered:
            report.add(
                Severity.WARNING,
                "unregistered-skill",
                f"Skill not in plugin.json: {ref}",
                path=corpus.relative(skill_file),
                section=SECTION_UNREGISTERED_SKILLS,
            )


def _check_unregistered_agents(
    corpus: Corpus, manifest: PluginManifest, report: ValidationReport
) -> None:
    # Directory mode registers every agent file implicitly
    if manifest.agents_mode != AgentsMode.ARRAY:
        return

    registered = {corpus.agent_path(ref) for ref in manifest.agents}
    for agent_file in corpus.discover_agent_files():
        if agent_file not in registered:
            report.add(
                Severity.WARNING,
                "unregistered-agent",
                f"Agent file not in plugin.json: {agent_file.stem}",
                path=corpus.relative(agent_file),
                section=SECTION_UNREGISTERED_AGENTS,
            )


def _check_duplicate_names(report: ValidationReport) -> None:
    for documents in (report.skills, report.agents):
        by_name: Dict[str, List[str]] = defaultdict(list)
        for doc in documents:
            if doc.name:
                by_name[doc.name].append(doc.path)

        for name, paths in by_name.items():
            if len(paths) > 1:
                report.add(
                    Severity.ERROR,
                    "duplicate-name",
                    f"Duplicate {documents[0].kind.value} name '{name}': {', '.join(paths)}",
                    path=paths[0],
                    section=SECTION_LINT,
                )


def _check_references(report: ValidationReport) -> None:
    known = {doc.name for doc in report.skills if doc.name}
    for doc in report.skills + report.agents:
        for ref in doc.references:
            if ref not in known:
                report.add(
                    Severity.WARNING,
                    "unresolved-reference",
                    f"{doc.path} references unknown skill '{ref}'",
                    path=doc.path,
                    section=SECTION_LINT,
                )

"""
Skill Catalog CLI - Main entry point.

Provides commands for:
- Validating a plugin marketplace against the files on disk
- Generating the compressed skills index
- Listing and inspecting registered skills and agents
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import List, Optional

import click
from pydantic import ValidationError

from skill_catalog.catalog import Corpus, Document, Issue, Severity, ValidationReport
from skill_catalog.config import get_settings
from skill_catalog.errors import CatalogError
from skill_catalog.index import (
    RouteTable,
    build_index,
    default_route_table,
    load_routes,
    update_readme,
)
from skill_catalog.observability import get_logger, setup_logging
from skill_catalog.validation import (
    SECTION_AGENTS,
    SECTION_LINT,
    SECTION_SKILLS,
    SECTION_UNREGISTERED_AGENTS,
    SECTION_UNREGISTERED_SKILLS,
    validate_marketplace,
)


logger = get_logger("skill_catalog")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("-q", "--quiet", is_flag=True, help="Suppress output")
@click.option(
    "--repo-root", "-r",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Plugin repository root (default: SKILL_CATALOG_REPO_ROOT or cwd)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, repo_root: Optional[Path]):
    """Skill Catalog - validate and index agent/skill plugin repositories."""
    ctx.ensure_object(dict)
    try:
        settings = get_settings()
    except ValidationError as e:
        _fail(f"Invalid SKILL_CATALOG_* configuration: {e}")
        return

    if verbose:
        setup_logging("DEBUG")
    elif quiet:
        setup_logging("ERROR")
    else:
        setup_logging()

    root = repo_root.resolve() if repo_root else settings.resolve_repo_root()
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["corpus"] = Corpus(
        root,
        plugin_dir=settings.plugin_dir,
        readme_name=settings.readme_name,
    )


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


# ==============================================================================
# Validate
# ==============================================================================

def _echo_issues(issues: List[Issue]) -> None:
    for issue in issues:
        if issue.severity == Severity.ERROR:
            click.secho(f"ERROR: {issue.message}", fg="red")
        else:
            click.secho(f"WARNING: {issue.message}", fg="yellow")


def _echo_report(report: ValidationReport) -> None:
    """Human-readable report in the layout of the marketplace check script."""
    click.echo("Validating marketplace structure...")
    click.echo("")

    if report.fatal:
        _echo_issues(report.issues)
        return

    click.secho("marketplace.json syntax: OK", fg="green")
    click.secho("plugin.json syntax: OK", fg="green")

    def section(section_name: str, title: str, documents: Optional[List[Document]] = None) -> None:
        click.echo("")
        click.echo(title)
        for doc in documents or []:
            label = doc.name or "(unnamed)"
            suffix = f" ({doc.source})" if doc.kind.value == "skill" else ""
            click.secho(f"OK: {label}{suffix}", fg="green")
        _echo_issues([i for i in report.issues if i.section == section_name])

    section(SECTION_SKILLS, "Checking skills...", report.skills)
    section(SECTION_AGENTS, "Checking agents...", report.agents)
    section(SECTION_UNREGISTERED_SKILLS, "Checking for unregistered skills...")

    if report.agents_source is not None:
        click.echo("")
        click.echo("Checking for unregistered agents...")
        click.secho(
            f"Using directory mode: all agents in {report.agents_source} are included",
            fg="green",
        )
    else:
        section(SECTION_UNREGISTERED_AGENTS, "Checking for unregistered agents...")

    section(SECTION_LINT, "Checking cross-references...")

    click.echo("")
    click.echo("=== Summary ===")
    click.echo(f"Skills registered: {report.skills_registered}")
    if report.agents_source is not None:
        click.echo(
            f"Agents registered: {report.agents_registered} "
            f"(directory mode: {report.agents_source})"
        )
    else:
        click.echo(f"Agents registered: {report.agents_registered}")
    click.echo(f"Plugin version: {report.plugin_version}")


@cli.command("validate")
@click.option("--strict", is_flag=True, help="Fail on warnings as well as errors")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.pass_context
def validate(ctx: click.Context, strict: bool, output_format: str):
    """
    Validate plugin.json against the skill and agent files on disk.

    Exits 1 when errors are found (or warnings, with --strict).

    Examples:

        skill-catalog validate

        skill-catalog -r ../dotnet-skills validate --strict --format json
    """
    corpus: Corpus = ctx.obj["corpus"]
    report = validate_marketplace(corpus)
    passed = report.passed_strict if strict else report.passed

    if output_format == "json":
        payload = report.model_dump(mode="json")
        payload["passed"] = passed
        payload["error_count"] = len(report.errors)
        payload["warning_count"] = len(report.warnings)
        click.echo(json.dumps(payload, indent=2))
        if not passed:
            sys.exit(1)
        return

    _echo_report(report)

    if report.errors:
        click.secho(f"Errors: {len(report.errors)}", fg="red")
    if report.warnings:
        click.secho(f"Warnings: {len(report.warnings)}", fg="yellow")

    if not passed:
        if report.errors:
            sys.exit(1)
        click.secho("Validation failed: warnings are not allowed with --strict", fg="red")
        sys.exit(1)

    click.secho("Validation passed!", fg="green")


# ==============================================================================
# Index
# ==============================================================================

def _route_table(routes: Optional[str]) -> RouteTable:
    return load_routes(Path(routes)) if routes else default_route_table()


@cli.command("index")
@click.option(
    "--update-readme", "update_readme_flag", is_flag=True,
    help="Rewrite the marked block in README.md instead of printing",
)
@click.option(
    "--routes", "-f",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML file with category routes",
)
@click.pass_context
def index(ctx: click.Context, update_readme_flag: bool, routes: Optional[str]):
    """
    Generate the compressed skills index from plugin.json.

    Output is written to stdout; redirect as needed.
    """
    corpus: Corpus = ctx.obj["corpus"]
    settings = get_settings()
    try:
        skill_index = build_index(corpus, routes=_route_table(routes), title=settings.index_title)
        compressed = skill_index.render()

        if update_readme_flag:
            update_readme(corpus.readme_path, compressed, settings.index_title)
            logger.info(f"Updated {corpus.readme_path}")
            if not ctx.obj["quiet"]:
                click.echo(f"Updated {corpus.relative(corpus.readme_path)}", err=True)
            return
    except CatalogError as e:
        _fail(str(e))

    click.echo(compressed)


# ==============================================================================
# List / Show
# ==============================================================================

@cli.command("list")
@click.argument("kind", type=click.Choice(["skills", "agents"]), default="skills")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option(
    "--routes", "-f",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML file with category routes",
)
@click.pass_context
def list_documents(ctx: click.Context, kind: str, output_format: str, routes: Optional[str]):
    """List registered skills or agents."""
    corpus: Corpus = ctx.obj["corpus"]

    try:
        manifest = corpus.load_plugin_manifest()
        if kind == "skills":
            table = _route_table(routes)
            documents = corpus.load_registered_skills(manifest)
            categories = [table.categorize(doc.source or doc.path) for doc in documents]
        else:
            documents = corpus.load_registered_agents(manifest)
            categories = [None] * len(documents)
    except CatalogError as e:
        _fail(str(e))
        return

    if output_format == "json":
        rows = []
        for doc, category in zip(documents, categories):
            row = doc.model_dump(mode="json", exclude={"extra"})
            if kind == "skills":
                row["category"] = category
            rows.append(row)
        click.echo(json.dumps(rows, indent=2))
        return

    if not documents:
        click.echo(f"No {kind} registered.")
        return

    click.echo(f"Registered {kind} ({len(documents)}):\n")
    for doc, category in zip(documents, categories):
        label = doc.name or "(unnamed)"
        if category:
            label = f"{label} [{category}]"
        elif kind == "agents" and doc.model:
            label = f"{label} [model: {doc.model}]"
        click.echo(f"  {label}")
        if doc.description and not ctx.obj["quiet"]:
            click.echo(f"      {_first_line(doc.description)}")


def _first_line(text: str, width: int = 100) -> str:
    line = text.strip().splitlines()[0] if text.strip() else ""
    return line if len(line) <= width else line[: width - 3] + "..."


@cli.command("show")
@click.argument("name")
@click.pass_context
def show(ctx: click.Context, name: str):
    """
    Show one skill or agent by frontmatter name.

    NAME: Document name (e.g., 'akka-net-best-practices')
    """
    corpus: Corpus = ctx.obj["corpus"]

    try:
        manifest = corpus.load_plugin_manifest()
        documents = corpus.load_registered_skills(manifest) + corpus.load_registered_agents(manifest)
    except CatalogError as e:
        _fail(str(e))
        return

    matches = [doc for doc in documents if doc.name == name]
    if not matches:
        _fail(f"No skill or agent named '{name}'")
        return

    for doc in matches:
        click.echo(f"Name: {doc.name}")
        click.echo(f"Kind: {doc.kind.value}")
        click.echo(f"Path: {doc.path}")
        if doc.source:
            click.echo(f"Registered as: {doc.source}")
        if doc.model:
            click.echo(f"Model: {doc.model}")
        if doc.description:
            click.echo(f"Description: {doc.description}")
        for key, value in doc.extra.items():
            click.echo(f"{key}: {value}")
        if doc.references:
            click.echo("References:")
            for ref in doc.references:
                click.echo(f"  - {ref}")


# ==============================================================================
# Entry Point
# ==============================================================================

# Alias for compatibility
app = cli


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()

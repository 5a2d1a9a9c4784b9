"""
Catalog Models - Pydantic models for the agent/skill corpus.

Defines:
- PluginManifest / MarketplaceManifest: the .claude-plugin manifests
- Document: a parsed agent or skill markdown file
- Issue / ValidationReport: results of marketplace validation
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DocumentKind(str, Enum):
    """Kind of corpus document."""
    SKILL = "skill"
    AGENT = "agent"


class AgentsMode(str, Enum):
    """How plugin.json registers agents."""
    DIRECTORY = "directory"
    ARRAY = "array"


class Severity(str, Enum):
    """Severity of a validation issue."""
    ERROR = "error"
    WARNING = "warning"


class PluginManifest(BaseModel):
    """
    Contents of .claude-plugin/plugin.json.

    ``skills`` lists skill directories (each holding a SKILL.md).
    ``agents`` is either a directory path or a list of agent file paths
    without the ``.md`` suffix.
    """
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    agents: Optional[Union[str, List[str]]] = None

    @field_validator("skills")
    @classmethod
    def validate_skill_refs(cls, v: List[str]) -> List[str]:
        """Skill references must be non-empty."""
        for ref in v:
            if not ref.strip():
                raise ValueError("Empty skill reference")
        return v

    @property
    def agents_mode(self) -> Optional[AgentsMode]:
        """None when plugin.json has no agents key."""
        if self.agents is None:
            return None
        if isinstance(self.agents, str):
            return AgentsMode.DIRECTORY
        return AgentsMode.ARRAY


class MarketplaceManifest(BaseModel):
    """Contents of .claude-plugin/marketplace.json."""
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    owner: Optional[Union[str, Dict[str, Any]]] = None
    plugins: List[Dict[str, Any]] = Field(default_factory=list)


class Document(BaseModel):
    """A parsed agent or skill document."""
    model_config = ConfigDict(extra="forbid")

    kind: DocumentKind
    name: Optional[str] = Field(None, description="Frontmatter name")
    description: Optional[str] = None
    model: Optional[str] = Field(None, description="Preferred model (agents)")
    path: str = Field(..., description="Path relative to repo root, posix style")
    source: Optional[str] = Field(
        None,
        description="Manifest reference that registered this document",
    )
    extra: Dict[str, Any] = Field(
        default_factory=dict,
        description="Frontmatter keys other than name/description/model",
    )
    references: List[str] = Field(
        default_factory=list,
        description="Skill names referenced as skill:<name> in the body",
    )


class Issue(BaseModel):
    """A single validation finding."""
    model_config = ConfigDict(extra="forbid")

    severity: Severity
    code: str
    message: str
    path: Optional[str] = None
    section: str = Field("lint", description="Report section the issue belongs to")


class ValidationReport(BaseModel):
    """Outcome of validating a plugin marketplace."""

    issues: List[Issue] = Field(default_factory=list)
    skills: List[Document] = Field(default_factory=list)
    agents: List[Document] = Field(default_factory=list)
    skills_registered: int = 0
    agents_registered: int = 0
    agents_mode: Optional[AgentsMode] = None
    agents_source: Optional[str] = None
    plugin_version: Optional[str] = None
    fatal: bool = Field(False, description="Checking stopped early")

    def add(
        self,
        severity: Severity,
        code: str,
        message: str,
        path: Optional[str] = None,
        section: str = "lint",
    ) -> Issue:
        issue = Issue(
            severity=severity, code=code, message=message, path=path, section=section
        )
        self.issues.append(issue)
        return issue

    @property
    def errors(self) -> List[Issue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[Issue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def passed(self) -> bool:
        return not self.errors

    @property
    def passed_strict(self) -> bool:
        return not self.issues

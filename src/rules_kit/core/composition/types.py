"""Types shared by the rule composition pipeline."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from rules_kit.core.utils.text import serialize_frontmatter


class Tier(str, Enum):
    """One override layer of the template library."""

    GLOBAL = "global"
    BASE = "base"
    ARCHITECTURE = "architecture"
    VERSION = "version"
    STATE_MANAGEMENT = "stateManagement"
    TESTING = "testing"
    SIGNALS = "signals"
    MCP = "mcp"

    @property
    def merges(self) -> bool:
        """Whether same-named documents in this tier join a cross-tier group."""
        return self in MERGE_ORDER

    @property
    def precedence(self) -> int:
        return MERGE_ORDER.index(self) if self in MERGE_ORDER else -1


# Ascending precedence inside a multi-tier group
MERGE_ORDER: Tuple[Tier, ...] = (Tier.BASE, Tier.ARCHITECTURE, Tier.VERSION)

# Directory enumeration order; later entries win destination collisions
RESOLUTION_ORDER: Tuple[Tier, ...] = (
    Tier.GLOBAL,
    Tier.BASE,
    Tier.VERSION,
    Tier.ARCHITECTURE,
    Tier.STATE_MANAGEMENT,
    Tier.TESTING,
    Tier.SIGNALS,
    Tier.MCP,
)


@dataclass(frozen=True)
class SourceDirectory:
    """A candidate directory for one tier (may not exist)."""

    tier: Tier
    path: Path
    label: Optional[str] = None


@dataclass(frozen=True)
class SourceDocument:
    """One template file discovered in a tier directory.

    Attributes:
        tier: Tier the file was found in
        path: Absolute path of the template
        base_name: File name with the source suffix (``controllers.md``)
        label: Tier qualifier (architecture key, version range,
            state manager or MCP tool key)
    """

    tier: Tier
    path: Path
    base_name: str
    label: Optional[str] = None

    @property
    def stem(self) -> str:
        return Path(self.base_name).stem


@dataclass(frozen=True)
class MergeGroup:
    """All documents collapsing into one output, in ascending precedence."""

    base_name: str
    documents: Tuple[SourceDocument, ...]

    @property
    def primary(self) -> SourceDocument:
        return self.documents[0]

    @property
    def tier(self) -> Tier:
        return self.primary.tier

    @property
    def is_multi_tier(self) -> bool:
        return len(self.documents) > 1

    @property
    def source_paths(self) -> Tuple[Path, ...]:
        return tuple(doc.path for doc in self.documents)


@dataclass(frozen=True)
class PlannedOutput:
    """A merge group bound to its destination path."""

    group: MergeGroup
    destination: Path


@dataclass
class OutputDocument:
    """The persisted artifact: destination, merged frontmatter and body."""

    path: Path
    frontmatter: Dict[str, Any]
    body: str
    sources: Tuple[Path, ...] = ()

    def render(self) -> str:
        return serialize_frontmatter(self.frontmatter, self.body)


@dataclass(frozen=True)
class RunContext:
    """User selections and detected values for one generation run.

    ``project_path`` is the application root relative to the repository
    (used for glob prefixes and placeholders); ``cursor_path`` is where the
    ``.cursor`` directory lives, relative to ``workspace``.
    """

    stack: str
    detected_version: Optional[str] = None
    version_range: Optional[str] = None
    formatted_version_name: Optional[str] = None
    architecture: Optional[str] = None
    state_management: Optional[str] = None
    include_testing: bool = False
    include_signals: bool = False
    include_global: bool = True
    mcp_tools: Tuple[str, ...] = ()
    project_path: Optional[str] = "."
    cursor_path: Optional[str] = "."
    workspace: Path = field(default_factory=Path.cwd)
    debug: bool = False


__all__ = [
    "Tier",
    "MERGE_ORDER",
    "RESOLUTION_ORDER",
    "SourceDirectory",
    "SourceDocument",
    "MergeGroup",
    "PlannedOutput",
    "OutputDocument",
    "RunContext",
]

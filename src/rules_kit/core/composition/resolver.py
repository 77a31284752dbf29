"""Source discovery across template-library tiers.

Directory conventions (relative to the template library root):
- Global:            global/*.md
- Stack base:        stacks/<stack>/base/*.md
- Version overlay:   stacks/<stack>/<range>/*.md
- Architecture:      stacks/<stack>/architectures/<arch>/*.md
- State management:  stacks/<stack>/state-management/<name>/*.md
- Testing:           stacks/<stack>/testing/*.md
- Signals:           stacks/<stack>/<range>/signals/*.md, else stacks/<stack>/signals/*.md
- MCP tools:         mcp-tools/<tool>/*.md

A directory that does not exist contributes nothing.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Dict, FrozenSet, List

from .types import RESOLUTION_ORDER, RunContext, SourceDirectory, SourceDocument, Tier

logger = logging.getLogger(__name__)

STACKS_DIR = "stacks"

# Feature tiers only exist for some stacks
FEATURE_STACKS: Dict[Tier, FrozenSet[str]] = {
    Tier.STATE_MANAGEMENT: frozenset({"react"}),
    Tier.TESTING: frozenset({"react", "angular"}),
    Tier.SIGNALS: frozenset({"angular"}),
}


def supports_feature(stack: str, tier: Tier) -> bool:
    return stack in FEATURE_STACKS.get(tier, frozenset())


class SourceResolver:
    """Enumerates tier directories and the source documents inside them."""

    def __init__(self, templates_dir: Path, *, source_suffix: str = ".md") -> None:
        self.templates_dir = Path(templates_dir)
        self.source_suffix = source_suffix

    def stack_dir(self, stack: str) -> Path:
        return self.templates_dir / STACKS_DIR / stack

    def signals_dir(self, run: RunContext) -> Path:
        """Prefer a version-scoped signals directory over the shared one."""
        stack_dir = self.stack_dir(run.stack)
        if run.version_range:
            scoped = stack_dir / run.version_range / "signals"
            if scoped.is_dir():
                return scoped
        return stack_dir / "signals"

    def tier_directories(self, tier: Tier, run: RunContext) -> List[SourceDirectory]:
        """Candidate directories of one tier for ``run`` (empty when the tier is off)."""
        stack_dir = self.stack_dir(run.stack)
        if tier is Tier.GLOBAL:
            if not run.include_global:
                return []
            return [SourceDirectory(tier, self.templates_dir / "global")]
        if tier is Tier.BASE:
            return [SourceDirectory(tier, stack_dir / "base")]
        if tier is Tier.VERSION:
            if not run.version_range:
                return []
            return [SourceDirectory(tier, stack_dir / run.version_range, run.version_range)]
        if tier is Tier.ARCHITECTURE:
            if not run.architecture:
                return []
            return [
                SourceDirectory(
                    tier, stack_dir / "architectures" / run.architecture, run.architecture
                )
            ]
        if tier is Tier.MCP:
            return [
                SourceDirectory(tier, self.templates_dir / "mcp-tools" / tool, tool)
                for tool in run.mcp_tools
            ]
        if not supports_feature(run.stack, tier):
            return []
        if tier is Tier.STATE_MANAGEMENT and run.state_management:
            return [
                SourceDirectory(
                    tier,
                    stack_dir / "state-management" / run.state_management,
                    run.state_management,
                )
            ]
        if tier is Tier.TESTING and run.include_testing:
            return [SourceDirectory(tier, stack_dir / "testing")]
        if tier is Tier.SIGNALS and run.include_signals:
            return [SourceDirectory(tier, self.signals_dir(run), run.version_range)]
        return []

    def directories(self, run: RunContext) -> List[SourceDirectory]:
        """Candidate directories for ``run``, ordered by ``RESOLUTION_ORDER``."""
        return [d for tier in RESOLUTION_ORDER for d in self.tier_directories(tier, run)]

    def list_directory(self, directory: SourceDirectory) -> List[SourceDocument]:
        """List source documents in one directory (sorted by name)."""
        path = directory.path
        if not path.is_dir():
            logger.debug("No %s templates at %s", directory.tier.value, path)
            return []
        try:
            names = sorted(
                p.name
                for p in path.iterdir()
                if p.is_file() and p.name.endswith(self.source_suffix)
            )
        except OSError as exc:
            logger.warning("Failed to list %s: %s", path, exc)
            return []
        return [
            SourceDocument(
                tier=directory.tier,
                path=path / name,
                base_name=name,
                label=directory.label,
            )
            for name in names
        ]

    def resolve_sync(self, run: RunContext) -> List[SourceDocument]:
        docs: List[SourceDocument] = []
        for directory in self.directories(run):
            docs.extend(self.list_directory(directory))
        return docs

    async def resolve(self, run: RunContext) -> List[SourceDocument]:
        """List every tier directory concurrently; keep resolution order."""
        directories = await asyncio.to_thread(self.directories, run)
        listings = await asyncio.gather(
            *(asyncio.to_thread(self.list_directory, d) for d in directories)
        )
        docs: List[SourceDocument] = []
        for listing in listings:
            docs.extend(listing)
        return docs


__all__ = ["SourceResolver", "FEATURE_STACKS", "supports_feature", "STACKS_DIR"]

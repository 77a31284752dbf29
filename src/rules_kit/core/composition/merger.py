"""Rule merger: group same-named sources across tiers and compose outputs.

Base, architecture and version documents that share a file name collapse
into one output. Tiers are applied in ascending precedence (base, then
architecture, then version): later frontmatter wins on conflicts and every
later body is appended under a generated sub-heading. Global, feature and
MCP documents are always standalone.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from rules_kit.core.config.models import RuleConfig
from rules_kit.core.results import ReadResult, ReadStatus
from rules_kit.core.utils.io import read_text
from rules_kit.core.utils.text import parse_frontmatter

from .cache import ContentCache
from .metadata import TierMetadata, build_frontmatter, tier_metadata
from .paths import output_path
from .templating import substitute_for_run
from .types import (
    MergeGroup,
    OutputDocument,
    PlannedOutput,
    RunContext,
    SourceDocument,
    Tier,
)

logger = logging.getLogger(__name__)


def tier_heading(doc: SourceDocument) -> str:
    """Sub-heading introducing an appended tier body."""
    label = f" ({doc.label})" if doc.label else ""
    if doc.tier is Tier.ARCHITECTURE:
        return f"## Architecture-specific guidance{label}"
    if doc.tier is Tier.VERSION:
        return f"## Version-specific guidance{label}"
    return f"## {doc.tier.value.capitalize()} guidance{label}"


def group_documents(documents: Iterable[SourceDocument]) -> List[MergeGroup]:
    """Group documents; only base/architecture/version tiers merge.

    Groups are returned in order of first appearance.
    """
    order: List[Tuple[str, str]] = []
    buckets: Dict[Tuple[str, str], List[SourceDocument]] = {}
    for index, doc in enumerate(documents):
        key = ("merge", doc.base_name) if doc.tier.merges else ("single", f"{index}")
        if key not in buckets:
            buckets[key] = []
            order.append(key)
        buckets[key].append(doc)

    groups: List[MergeGroup] = []
    for key in order:
        docs = sorted(buckets[key], key=lambda d: d.tier.precedence)
        groups.append(MergeGroup(base_name=docs[0].base_name, documents=tuple(docs)))
    return groups


def plan_outputs(
    documents: Iterable[SourceDocument],
    run: RunContext,
    *,
    output_suffix: str = ".mdc",
) -> List[PlannedOutput]:
    """Bind groups to destinations; on a collision the later group wins.

    ``documents`` arrive in ``RESOLUTION_ORDER`` (see ``SourceResolver``), so
    "later" means the tier listed later in that tuple.
    """
    planned: Dict[Path, PlannedOutput] = {}
    for group in group_documents(documents):
        destination = output_path(group.primary, run, output_suffix)
        if destination in planned:
            logger.debug(
                "Output %s from %s replaces %s",
                destination,
                group.primary.path,
                planned[destination].group.primary.path,
            )
        planned[destination] = PlannedOutput(group=group, destination=destination)
    return list(planned.values())


class RuleMerger:
    """Reads sources (through the content cache) and composes output documents."""

    def __init__(self, cache: ContentCache) -> None:
        self.cache = cache

    def read_source_sync(self, path: Path) -> ReadResult[str]:
        cached = self.cache.get(path)
        if cached is not None:
            return ReadResult.success(cached, path)
        try:
            content = read_text(path)
        except FileNotFoundError:
            logger.debug("Template vanished before read: %s", path)
            return ReadResult.absent(path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to read template %s: %s", path, exc)
            return ReadResult.failure(ReadStatus.IO_ERROR, str(exc), path)
        self.cache.set(path, content)
        return ReadResult.success(content, path)

    async def read_source(self, path: Path) -> ReadResult[str]:
        return await asyncio.to_thread(self.read_source_sync, path)

    async def merge(
        self,
        planned: PlannedOutput,
        config: RuleConfig,
        run: RunContext,
    ) -> ReadResult[OutputDocument]:
        """Compose one output document.

        Tiers are processed strictly in group order. A source that cannot be
        read is left out; the output fails only when no source is readable.
        """
        group: MergeGroup = planned.group
        merged: Optional[TierMetadata] = None
        bodies: List[str] = []
        used: List[Path] = []
        last_failure: Optional[ReadResult[str]] = None

        for doc in group.documents:
            result = await self.read_source(doc.path)
            if not result.ok or result.value is None:
                last_failure = result
                continue
            parsed = parse_frontmatter(result.value)
            if parsed.skipped_lines:
                logger.debug(
                    "Skipped %d malformed frontmatter line(s) in %s",
                    len(parsed.skipped_lines),
                    doc.path,
                )
            meta = tier_metadata(doc, parsed.frontmatter, config, run)
            if merged is None:
                merged = meta
                bodies.append(parsed.content)
            else:
                merged.absorb(meta)
                bodies.append(f"{tier_heading(doc)}\n\n{parsed.content}".rstrip())
            used.append(doc.path)

        if merged is None:
            if last_failure is None:
                return ReadResult.failure(
                    ReadStatus.ABSENT, "no source documents", planned.destination
                )
            return ReadResult.failure(
                last_failure.status,
                last_failure.error or "unreadable",
                planned.destination,
            )

        body = substitute_for_run("\n\n".join(b for b in bodies if b), run)
        document = OutputDocument(
            path=planned.destination,
            frontmatter=build_frontmatter(run, merged),
            body=body,
            sources=tuple(used),
        )
        return ReadResult.success(document, planned.destination)


__all__ = ["RuleMerger", "group_documents", "plan_outputs", "tier_heading"]

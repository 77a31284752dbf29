"""Persistence scheduler: batched, incremental writes of composed rules.

Planned outputs are processed in fixed-size batches. Items inside a batch
run concurrently (blocking filesystem work goes to worker threads) and the
scheduler yields to the event loop between batches. A failure in one item
is logged and recorded without affecting its siblings.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Sequence

from rules_kit.core.output.writer import RuleFileWriter
from rules_kit.core.results import PersistReport, ReadResult, WriteOutcome, WriteStatus

from .types import OutputDocument, PlannedOutput

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]
ComposeFn = Callable[[PlannedOutput], Awaitable[ReadResult[OutputDocument]]]


def is_up_to_date(destination: Path, sources: Sequence[Path]) -> bool:
    """True when ``destination`` exists and is not older than any source.

    Any filesystem error means "needs update".
    """
    try:
        if not destination.is_file():
            return False
        dest_mtime = destination.stat().st_mtime
        for source in sources:
            if source.stat().st_mtime > dest_mtime:
                return False
    except OSError as exc:
        logger.debug("Incremental check failed for %s: %s", destination, exc)
        return False
    return True


class PersistenceScheduler:
    def __init__(
        self,
        writer: RuleFileWriter,
        *,
        batch_size: int = 10,
        incremental: bool = True,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.writer = writer
        self.batch_size = batch_size
        self.incremental = incremental

    async def persist(
        self,
        items: Sequence[PlannedOutput],
        compose: ComposeFn,
        *,
        root: Optional[Path] = None,
        extra_sources: Sequence[Path] = (),
        progress: Optional[ProgressCallback] = None,
    ) -> PersistReport:
        """Compose and write every planned output.

        Args:
            items: Planned outputs (destination + merge group)
            compose: Coroutine producing the output document for an item
            root: Output root, created up front (OutputRootError halts the run)
            extra_sources: Files every output depends on (the kit config)
            progress: Called with (completed, total) after each written or
                skipped output

        Returns:
            PersistReport with one outcome per item, in input order.
        """
        if root is not None:
            await asyncio.to_thread(self.writer.ensure_root, root)

        total = len(items)
        completed = 0
        outcomes: List[WriteOutcome] = []

        async def _one(item: PlannedOutput) -> WriteOutcome:
            nonlocal completed
            outcome = await self._persist_one(item, compose, extra_sources)
            if outcome.status is not WriteStatus.FAILED:
                completed += 1
                if progress is not None:
                    progress(completed, total)
            return outcome

        for start in range(0, total, self.batch_size):
            batch = items[start:start + self.batch_size]
            outcomes.extend(await asyncio.gather(*(_one(item) for item in batch)))
            # Let the host event loop run between batches
            await asyncio.sleep(0)

        report = PersistReport(outcomes)
        logger.info(
            "Persisted rules: %d written, %d skipped, %d failed",
            len(report.written),
            len(report.skipped),
            len(report.failed),
        )
        return report

    async def _persist_one(
        self,
        item: PlannedOutput,
        compose: ComposeFn,
        extra_sources: Sequence[Path],
    ) -> WriteOutcome:
        destination = item.destination
        if self.incremental:
            sources = list(item.group.source_paths) + list(extra_sources)
            if await asyncio.to_thread(is_up_to_date, destination, sources):
                logger.debug("Up to date, skipping %s", destination)
                return WriteOutcome(destination, WriteStatus.SKIPPED)

        result = await compose(item)
        if not result.ok or result.value is None:
            logger.warning("Could not compose %s: %s", destination, result.error)
            return WriteOutcome(destination, WriteStatus.FAILED, result.error)

        try:
            await asyncio.to_thread(self.writer.write_document, result.value)
        except (OSError, ValueError) as exc:
            logger.warning("Failed to write %s: %s", destination, exc)
            return WriteOutcome(destination, WriteStatus.FAILED, str(exc))
        return WriteOutcome(destination, WriteStatus.WRITTEN)


__all__ = ["PersistenceScheduler", "ProgressCallback", "is_up_to_date"]

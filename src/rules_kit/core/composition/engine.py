"""Rule composition engine.

Pipeline: resolve tier directories -> group and plan outputs -> merge each
group (reading through the content cache) -> persist in batches.

Usage:
    engine = RulesKitEngine(templates_dir)
    run = RunContext(stack="laravel", detected_version="11", workspace=repo)
    report = engine.generate_sync(run)
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Union

from rules_kit.core.config.models import RuleConfig
from rules_kit.core.config.settings import EngineSettings, resolve_templates_dir
from rules_kit.core.config.store import RuleConfigStore
from rules_kit.core.output.writer import RuleFileWriter
from rules_kit.core.results import PersistReport, ReadResult
from rules_kit.core.stacks import StackCatalog

from .cache import ContentCache
from .merger import RuleMerger, plan_outputs
from .paths import rules_root
from .resolver import SourceResolver
from .scheduler import PersistenceScheduler, ProgressCallback
from .types import OutputDocument, PlannedOutput, RunContext

logger = logging.getLogger(__name__)


class RulesKitEngine:
    """Owns the configuration store and content cache for a template library."""

    def __init__(
        self,
        templates_dir: Optional[Union[str, Path]] = None,
        *,
        settings: Optional[EngineSettings] = None,
        store: Optional[RuleConfigStore] = None,
        cache: Optional[ContentCache] = None,
        writer: Optional[RuleFileWriter] = None,
    ) -> None:
        self.settings = settings or EngineSettings.from_env()
        self.templates_dir = resolve_templates_dir(templates_dir)
        self.store = store or RuleConfigStore(self.templates_dir)
        self.cache: ContentCache = cache or ContentCache(
            self.settings.cache_max_size, self.settings.cache_ttl_seconds
        )
        self.catalog = StackCatalog(self.templates_dir, self.store)
        self.resolver = SourceResolver(
            self.templates_dir, source_suffix=self.settings.source_suffix
        )
        self.merger = RuleMerger(self.cache)
        self.writer = writer or RuleFileWriter()

    @property
    def config(self) -> RuleConfig:
        return self.store.load()

    def prepare(self, run: RunContext) -> RunContext:
        """Fill in the version range and its display name when not supplied."""
        version_range = run.version_range
        if not version_range and run.detected_version:
            version_range = self.catalog.map_version_to_range(run.stack, run.detected_version)
            if version_range is None:
                logger.debug(
                    "No version range for %s %s; skipping version overlay",
                    run.stack,
                    run.detected_version,
                )
        formatted = run.formatted_version_name
        if version_range and not formatted:
            formatted = self.catalog.formatted_version_name(run.stack, version_range)
        return replace(run, version_range=version_range, formatted_version_name=formatted)

    def plan(self, run: RunContext) -> List[PlannedOutput]:
        """Planned outputs for ``run`` (lists directories, reads no content)."""
        run = self.prepare(run)
        documents = self.resolver.resolve_sync(run)
        return plan_outputs(documents, run, output_suffix=self.settings.output_suffix)

    def count_rules(self, run: RunContext) -> int:
        return len(self.plan(run))

    async def generate(
        self,
        run: RunContext,
        progress: Optional[ProgressCallback] = None,
        *,
        incremental: Optional[bool] = None,
    ) -> PersistReport:
        """Compose and write every rule for ``run``.

        Raises:
            OutputRootError: If the output root cannot be created.
        """
        run = self.prepare(run)
        config = self.config
        documents = await self.resolver.resolve(run)
        items = plan_outputs(documents, run, output_suffix=self.settings.output_suffix)
        logger.info("Planned %d rule(s) for %s", len(items), run.stack)

        scheduler = PersistenceScheduler(
            self.writer,
            batch_size=self.settings.batch_size,
            incremental=self.settings.incremental if incremental is None else incremental,
        )
        config_path = self.store.config_path
        extra = [config_path] if config_path is not None else []

        async def _compose(item: PlannedOutput) -> ReadResult[OutputDocument]:
            return await self.merger.merge(item, config, run)

        return await scheduler.persist(
            items,
            _compose,
            root=rules_root(run),
            extra_sources=extra,
            progress=progress,
        )

    def generate_sync(
        self,
        run: RunContext,
        progress: Optional[ProgressCallback] = None,
        *,
        incremental: Optional[bool] = None,
    ) -> PersistReport:
        return asyncio.run(self.generate(run, progress, incremental=incremental))

    def clear_cache(self) -> None:
        self.cache.clear()


__all__ = ["RulesKitEngine"]

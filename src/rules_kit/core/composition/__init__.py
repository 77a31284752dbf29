"""Rule composition: tier resolution, merging, templating, caching and persistence."""
from .types import (
    MERGE_ORDER,
    RESOLUTION_ORDER,
    MergeGroup,
    OutputDocument,
    PlannedOutput,
    RunContext,
    SourceDirectory,
    SourceDocument,
    Tier,
)
from .cache import ContentCache
from .paths import format_rules_path, glob_prefix, normalize_project_path, rules_root
from .templating import substitute, substitute_for_run
from .resolver import SourceResolver
from .merger import RuleMerger, group_documents, plan_outputs
from .scheduler import PersistenceScheduler, is_up_to_date
from .engine import RulesKitEngine

__all__ = [
    "MERGE_ORDER",
    "RESOLUTION_ORDER",
    "MergeGroup",
    "OutputDocument",
    "PlannedOutput",
    "RunContext",
    "SourceDirectory",
    "SourceDocument",
    "Tier",
    "ContentCache",
    "format_rules_path",
    "glob_prefix",
    "normalize_project_path",
    "rules_root",
    "substitute",
    "substitute_for_run",
    "SourceResolver",
    "RuleMerger",
    "group_documents",
    "plan_outputs",
    "PersistenceScheduler",
    "is_up_to_date",
    "RulesKitEngine",
]

"""Routing metadata (``globs`` / ``alwaysApply``) for composed rules.

Each source document yields a :class:`TierMetadata`. Values carry a
strength: a value from the document's own frontmatter, a matching
``pattern_rules`` entry or the ``global.always`` list is EXPLICIT; a tier
default (configured globs, ``alwaysApply: false``) is DEFAULT. When a group
spans several tiers a later tier only replaces a routing value with one of
equal or greater strength, so a tier default never clobbers an explicit
value set by an earlier tier.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Mapping, Optional

from rules_kit.core.config.models import RuleConfig, StackConfig

from .paths import apply_root, normalize_project_path
from .types import RunContext, SourceDocument, Tier

logger = logging.getLogger(__name__)

MATCH_ALL = "**/*"

ROUTING_KEYS = ("globs", "alwaysApply")
# Never persisted into output frontmatter
TRANSIENT_KEYS = frozenset({"debug"})


class Strength(IntEnum):
    DEFAULT = 0
    EXPLICIT = 1


@dataclass
class TierMetadata:
    globs: Any = MATCH_ALL
    globs_strength: Strength = Strength.DEFAULT
    always_apply: bool = False
    always_strength: Strength = Strength.DEFAULT
    extra: Dict[str, Any] = field(default_factory=dict)

    def absorb(self, other: "TierMetadata") -> None:
        """Apply a later (higher-precedence) tier on top of this one."""
        if other.globs_strength >= self.globs_strength:
            self.globs = other.globs
            self.globs_strength = other.globs_strength
        if other.always_strength >= self.always_strength:
            self.always_apply = other.always_apply
            self.always_strength = other.always_strength
        self.extra.update(other.extra)


def base_metadata(run: RunContext) -> Dict[str, Any]:
    """Run-level keys every output carries (None values are dropped)."""
    data: Dict[str, Any] = {
        "stack": run.stack,
        "detectedVersion": run.detected_version,
        "versionRange": run.version_range,
        "projectPath": normalize_project_path(run.project_path),
        "architecture": run.architecture,
    }
    return {k: v for k, v in data.items() if v is not None and v != ""}


def _rooted(value: Any, run: RunContext) -> Any:
    if isinstance(value, str):
        return apply_root(value, run.project_path)
    if isinstance(value, list):
        return [apply_root(str(v), run.project_path) for v in value]
    return value


def _default_globs(stack_cfg: Optional[StackConfig], doc: SourceDocument) -> List[str]:
    if stack_cfg is None:
        return []
    if doc.tier is Tier.ARCHITECTURE:
        arch = stack_cfg.architecture(doc.label)
        if arch is not None and arch.globs:
            return list(arch.globs)
    return list(stack_cfg.globs)


def _pattern_for(stack_cfg: Optional[StackConfig], doc: SourceDocument) -> Optional[str]:
    if stack_cfg is None:
        return None
    if doc.tier is Tier.ARCHITECTURE:
        arch = stack_cfg.architecture(doc.label)
        if arch is not None:
            pattern = arch.match_pattern(doc.base_name)
            if pattern is not None:
                return pattern
    return stack_cfg.match_pattern(doc.base_name)


def _global_metadata(doc: SourceDocument, embedded: Mapping[str, Any], config: RuleConfig,
                     run: RunContext) -> TierMetadata:
    meta = TierMetadata()
    if config.is_always(doc.base_name):
        meta.globs, meta.globs_strength = MATCH_ALL, Strength.EXPLICIT
        meta.always_apply, meta.always_strength = True, Strength.EXPLICIT
        logger.debug("Always-apply rule %s", doc.base_name)
        return meta
    if "globs" in embedded:
        meta.globs, meta.globs_strength = _rooted(embedded["globs"], run), Strength.EXPLICIT
    if isinstance(embedded.get("alwaysApply"), bool):
        meta.always_apply, meta.always_strength = embedded["alwaysApply"], Strength.EXPLICIT
    return meta


def _stack_metadata(doc: SourceDocument, embedded: Mapping[str, Any], config: RuleConfig,
                    run: RunContext) -> TierMetadata:
    meta = TierMetadata()
    stack_cfg = config.stack(run.stack)

    if "globs" in embedded:
        meta.globs, meta.globs_strength = _rooted(embedded["globs"], run), Strength.EXPLICIT
    else:
        pattern = _pattern_for(stack_cfg, doc)
        if pattern is not None:
            meta.globs, meta.globs_strength = _rooted(pattern, run), Strength.EXPLICIT
            logger.debug("Pattern rule %s applies to %s", pattern, doc.base_name)
        else:
            defaults = _default_globs(stack_cfg, doc)
            if defaults:
                meta.globs = ",".join(_rooted(g, run) for g in defaults)

    if isinstance(embedded.get("alwaysApply"), bool):
        meta.always_apply, meta.always_strength = embedded["alwaysApply"], Strength.EXPLICIT
    elif config.is_always(doc.base_name):
        meta.always_apply, meta.always_strength = True, Strength.EXPLICIT
    return meta


def tier_metadata(
    doc: SourceDocument,
    embedded: Mapping[str, Any],
    config: RuleConfig,
    run: RunContext,
) -> TierMetadata:
    """Derive routing metadata for one source document."""
    if doc.tier in (Tier.GLOBAL, Tier.MCP):
        meta = _global_metadata(doc, embedded, config, run)
    else:
        meta = _stack_metadata(doc, embedded, config, run)
    meta.extra = {
        k: v for k, v in embedded.items() if k not in ROUTING_KEYS and k not in TRANSIENT_KEYS
    }
    return meta


def build_frontmatter(run: RunContext, meta: TierMetadata) -> Dict[str, Any]:
    """Assemble output frontmatter: description, globs, alwaysApply, then the rest."""
    rest: Dict[str, Any] = base_metadata(run)
    rest.update(meta.extra)
    for key in TRANSIENT_KEYS:
        rest.pop(key, None)

    data: Dict[str, Any] = {}
    description = rest.pop("description", None)
    if description not in (None, ""):
        data["description"] = description
    data["globs"] = meta.globs
    data["alwaysApply"] = meta.always_apply
    for key, value in rest.items():
        if key not in ROUTING_KEYS:
            data[key] = value
    return data


__all__ = [
    "MATCH_ALL",
    "Strength",
    "TierMetadata",
    "base_metadata",
    "tier_metadata",
    "build_frontmatter",
]

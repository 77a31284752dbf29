"""Stack catalog: which stacks, architectures, versions and MCP tools exist.

Combines the kit configuration with the template library layout so the CLI
(and the engine's version resolution) have one place to ask.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from rules_kit.core.config.models import GLOBAL_KEY, RuleConfig
from rules_kit.core.config.store import RuleConfigStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Choice:
    """A selectable value with its display name."""

    value: str
    name: str

    def to_dict(self) -> dict:
        return {"value": self.value, "name": self.name}


def format_architecture_name(key: str) -> str:
    """``feature-sliced`` -> ``Feature Sliced``."""
    return " ".join(word[:1].upper() + word[1:] for word in key.split("-"))


def _subdirectories(path: Path) -> List[str]:
    if not path.is_dir():
        return []
    try:
        return sorted(p.name for p in path.iterdir() if p.is_dir())
    except OSError as exc:
        logger.warning("Failed to list %s: %s", path, exc)
        return []


class StackCatalog:
    def __init__(self, templates_dir: Path, store: Optional[RuleConfigStore] = None) -> None:
        self.templates_dir = Path(templates_dir)
        self.store = store or RuleConfigStore(self.templates_dir)

    @property
    def config(self) -> RuleConfig:
        return self.store.load()

    def available_stacks(self) -> List[str]:
        """Stacks with a template directory, then stacks only named in config."""
        stacks = [s for s in _subdirectories(self.templates_dir / "stacks") if s != GLOBAL_KEY]
        for name in self.config.stacks:
            if name not in stacks:
                stacks.append(name)
        return stacks

    def available_architectures(self, stack: str) -> List[Choice]:
        stack_cfg = self.config.stack(stack)
        keys: List[str] = list(stack_cfg.architectures) if stack_cfg else []
        for key in _subdirectories(self.templates_dir / "stacks" / stack / "architectures"):
            if key not in keys:
                keys.append(key)
        choices: List[Choice] = []
        for key in keys:
            arch = stack_cfg.architecture(key) if stack_cfg else None
            name = arch.name if arch is not None and arch.name else format_architecture_name(key)
            choices.append(Choice(key, name))
        return choices

    def available_versions(self, stack: str) -> List[Choice]:
        stack_cfg = self.config.stack(stack)
        if stack_cfg is None:
            return []
        return [
            Choice(key, vr.name or self.formatted_version_name(stack, vr.range_name))
            for key, vr in stack_cfg.version_ranges.items()
        ]

    def map_version_to_range(self, stack: str, version: Optional[str]) -> Optional[str]:
        """Map a detected version to its version-range directory name.

        Tries ``version`` as a direct key first, then any key with the same
        integer value (``"11"`` matches key ``11``; ``"11.2"`` does not).
        Returns None when nothing matches.
        """
        if version is None or str(version).strip() == "":
            return None
        stack_cfg = self.config.stack(stack)
        if stack_cfg is None:
            return None
        version = str(version).strip()
        direct = stack_cfg.version_ranges.get(version)
        if direct is not None:
            return direct.range_name
        try:
            wanted = int(version)
        except ValueError:
            return None
        for key, vr in stack_cfg.version_ranges.items():
            try:
                if int(key) == wanted:
                    return vr.range_name
            except ValueError:
                continue
        return None

    def formatted_version_name(self, stack: str, version_range: Optional[str]) -> Optional[str]:
        """Display name for a range: config ``name`` (by key or range_name) or ``<Stack> <range>``."""
        if not version_range:
            return None
        stack_cfg = self.config.stack(stack)
        if stack_cfg is not None:
            direct = stack_cfg.version_ranges.get(version_range)
            if direct is not None and direct.name:
                return direct.name
            for vr in stack_cfg.version_ranges.values():
                if vr.range_name == version_range and vr.name:
                    return vr.name
        return f"{format_architecture_name(stack)} {version_range}"

    def available_mcp_tools(self) -> List[Choice]:
        return [Choice(key, tool.name) for key, tool in self.config.mcp_tools.items()]


__all__ = ["Choice", "StackCatalog", "format_architecture_name"]

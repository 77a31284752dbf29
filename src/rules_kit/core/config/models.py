"""
Data models for the kit configuration document.

The configuration document (``kit-config.yaml``) maps stack names to their
routing metadata, plus a reserved ``global`` entry::

    global:
      always: [README.md]
    laravel:
      globs: ["<root>/app/**/*.php"]
      pattern_rules:
        "<root>/app/Http/Controllers/**/*.php": [controllers.md]
      architectures:
        ddd: {name: Domain-Driven Design, globs: [...], pattern_rules: {...}}
      version_ranges:
        "11": {range_name: v10-11, name: Laravel 10-11}

Parsing is tolerant: entries with an unexpected shape are skipped (and
logged at debug level) instead of failing the build.
"""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

GLOBAL_KEY = "global"
MCP_TOOLS_KEY = "mcp_tools"
RESERVED_KEYS = frozenset({GLOBAL_KEY, MCP_TOOLS_KEY})


def _string_list(value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)):
        return tuple(str(v) for v in value if isinstance(v, (str, int, float)))
    return ()


def _pattern_rules(value: Any, *, owner: str) -> Dict[str, Tuple[str, ...]]:
    rules: Dict[str, Tuple[str, ...]] = {}
    if not isinstance(value, Mapping):
        if value is not None:
            logger.debug("Ignoring non-mapping pattern_rules for %s", owner)
        return rules
    for pattern, targets in value.items():
        files = _string_list(targets)
        if not files:
            logger.debug("Ignoring empty pattern rule %r for %s", pattern, owner)
            continue
        rules[str(pattern)] = files
    return rules


def _rule_file_name(identifier: str) -> str:
    return identifier.replace("\\", "/").rsplit("/", 1)[-1]


class _PatternRulesMixin:
    pattern_rules: Dict[str, Tuple[str, ...]]

    def match_pattern(self, file_name: str) -> Optional[str]:
        """Return the first pattern whose mapped files include ``file_name``.

        Mapped identifiers may carry a directory prefix
        (``controllers/controller-methods.md``); only the last path
        segment is compared.
        """
        for pattern, files in self.pattern_rules.items():
            if any(_rule_file_name(f) == file_name for f in files):
                return pattern
        return None


@dataclass(frozen=True)
class VersionRange:
    """One ``version_ranges`` entry: a version key mapped to a template directory."""

    key: str
    range_name: str
    name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"range_name": self.range_name}
        if self.name:
            data["name"] = self.name
        return data


@dataclass(frozen=True)
class ArchitectureConfig(_PatternRulesMixin):
    """Architecture-level override of a stack's globs and pattern rules."""

    key: str
    name: Optional[str] = None
    globs: Tuple[str, ...] = ()
    pattern_rules: Dict[str, Tuple[str, ...]] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, key: str, data: Any, *, stack: str) -> Optional["ArchitectureConfig"]:
        if data is None:
            return cls(key=key)
        if not isinstance(data, Mapping):
            logger.debug("Ignoring malformed architecture %s/%s", stack, key)
            return None
        name = data.get("name")
        return cls(
            key=key,
            name=str(name) if name else None,
            globs=_string_list(data.get("globs")),
            pattern_rules=_pattern_rules(data.get("pattern_rules"), owner=f"{stack}/{key}"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.name:
            data["name"] = self.name
        if self.globs:
            data["globs"] = list(self.globs)
        if self.pattern_rules:
            data["pattern_rules"] = {p: list(f) for p, f in self.pattern_rules.items()}
        return data


@dataclass(frozen=True)
class StackConfig(_PatternRulesMixin):
    """Routing metadata for one stack."""

    name: str
    globs: Tuple[str, ...] = ()
    pattern_rules: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    architectures: Dict[str, ArchitectureConfig] = field(default_factory=dict)
    version_ranges: Dict[str, VersionRange] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, name: str, data: Mapping[str, Any]) -> "StackConfig":
        architectures: Dict[str, ArchitectureConfig] = {}
        raw_arch = data.get("architectures")
        if isinstance(raw_arch, Mapping):
            for key, value in raw_arch.items():
                arch = ArchitectureConfig.from_mapping(str(key), value, stack=name)
                if arch is not None:
                    architectures[str(key)] = arch

        version_ranges: Dict[str, VersionRange] = {}
        raw_ranges = data.get("version_ranges")
        if isinstance(raw_ranges, Mapping):
            for key, value in raw_ranges.items():
                key = str(key)
                if isinstance(value, str):
                    version_ranges[key] = VersionRange(key=key, range_name=value)
                elif isinstance(value, Mapping):
                    range_name = value.get("range_name") or key
                    label = value.get("name")
                    version_ranges[key] = VersionRange(
                        key=key,
                        range_name=str(range_name),
                        name=str(label) if label else None,
                    )
                else:
                    logger.debug("Ignoring malformed version range %s/%s", name, key)

        return cls(
            name=name,
            globs=_string_list(data.get("globs")),
            pattern_rules=_pattern_rules(data.get("pattern_rules"), owner=name),
            architectures=architectures,
            version_ranges=version_ranges,
        )

    def architecture(self, key: Optional[str]) -> Optional[ArchitectureConfig]:
        if not key:
            return None
        return self.architectures.get(key)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.globs:
            data["globs"] = list(self.globs)
        if self.pattern_rules:
            data["pattern_rules"] = {p: list(f) for p, f in self.pattern_rules.items()}
        if self.architectures:
            data["architectures"] = {k: a.to_dict() for k, a in self.architectures.items()}
        if self.version_ranges:
            data["version_ranges"] = {k: v.to_dict() for k, v in self.version_ranges.items()}
        return data


@dataclass(frozen=True)
class McpToolConfig:
    key: str
    name: str
    description: str = ""


@dataclass(frozen=True)
class RuleConfig:
    """The parsed kit configuration.

    Immutable after load; use :meth:`with_always` to derive a modified copy
    that can be handed to ``RuleConfigStore.save``.
    """

    stacks: Dict[str, StackConfig] = field(default_factory=dict)
    always: Tuple[str, ...] = ()
    mcp_tools: Dict[str, McpToolConfig] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_mapping(cls, data: Any) -> "RuleConfig":
        if not isinstance(data, Mapping):
            logger.debug("Kit configuration is not a mapping; treating as empty")
            return cls()

        stacks: Dict[str, StackConfig] = {}
        for key, value in data.items():
            key = str(key)
            if key in RESERVED_KEYS:
                continue
            if not isinstance(value, Mapping):
                logger.debug("Ignoring non-mapping stack entry %r", key)
                continue
            stacks[key] = StackConfig.from_mapping(key, value)

        global_cfg = data.get(GLOBAL_KEY)
        always = _string_list(global_cfg.get("always")) if isinstance(global_cfg, Mapping) else ()

        mcp_tools: Dict[str, McpToolConfig] = {}
        raw_tools = data.get(MCP_TOOLS_KEY)
        if isinstance(raw_tools, Mapping):
            for key, value in raw_tools.items():
                if not isinstance(value, Mapping):
                    continue
                mcp_tools[str(key)] = McpToolConfig(
                    key=str(key),
                    name=str(value.get("name") or key),
                    description=str(value.get("description") or ""),
                )

        return cls(
            stacks=stacks,
            always=always,
            mcp_tools=mcp_tools,
            raw=copy.deepcopy(dict(data)),
        )

    def stack(self, name: Optional[str]) -> Optional[StackConfig]:
        if not name:
            return None
        return self.stacks.get(name)

    def is_always(self, file_name: str) -> bool:
        return file_name in self.always

    def with_always(self, names: Iterable[str]) -> "RuleConfig":
        return replace(self, always=tuple(dict.fromkeys(names)))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize back to the document shape, keeping unknown keys from ``raw``."""
        data: Dict[str, Any] = copy.deepcopy(self.raw)
        global_cfg = data.get(GLOBAL_KEY)
        global_cfg = dict(global_cfg) if isinstance(global_cfg, Mapping) else {}
        global_cfg["always"] = list(self.always)
        data[GLOBAL_KEY] = global_cfg

        for name, stack in self.stacks.items():
            existing = data.get(name)
            merged = dict(existing) if isinstance(existing, Mapping) else {}
            merged.update(stack.to_dict())
            data[name] = merged

        if self.mcp_tools:
            data[MCP_TOOLS_KEY] = {
                key: {"name": tool.name, "description": tool.description}
                for key, tool in self.mcp_tools.items()
            }
        return data


__all__ = [
    "GLOBAL_KEY",
    "MCP_TOOLS_KEY",
    "VersionRange",
    "ArchitectureConfig",
    "StackConfig",
    "McpToolConfig",
    "RuleConfig",
]

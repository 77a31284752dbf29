"""Engine settings with ``RULES_KIT_*`` environment overrides."""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, Optional

from rules_kit.core.exceptions import ConfigurationError

ENV_PREFIX = "RULES_KIT_"
TEMPLATES_DIR_ENV = "RULES_KIT_TEMPLATES_DIR"


def parse_bool(value: Any) -> bool | None:
    """Read an on/off flag (`1`, `true`, `yes`, `on` and their opposites); None if unrecognized."""
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        s = value.strip().lower()
        if s in {"1", "true", "yes", "on"}:
            return True
        if s in {"0", "false", "no", "off"}:
            return False
    return None


def _parse_positive_int(value: Any) -> int | None:
    if value is None:
        return None
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return None
    return parsed if parsed > 0 else None


def _parse_positive_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    return parsed if parsed > 0 else None


@dataclass(frozen=True)
class EngineSettings:
    batch_size: int = 10
    cache_max_size: int = 100
    cache_ttl_seconds: float = 300.0
    incremental: bool = True
    source_suffix: str = ".md"
    output_suffix: str = ".mdc"

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ConfigurationError(
                "batch_size must be at least 1", context={"batch_size": self.batch_size}
            )
        if self.cache_max_size < 1:
            raise ConfigurationError(
                "cache_max_size must be at least 1",
                context={"cache_max_size": self.cache_max_size},
            )
        if self.cache_ttl_seconds <= 0:
            raise ConfigurationError(
                "cache_ttl_seconds must be positive",
                context={"cache_ttl_seconds": self.cache_ttl_seconds},
            )
        for name in ("source_suffix", "output_suffix"):
            suffix = getattr(self, name)
            if not suffix.startswith(".") or len(suffix) < 2:
                raise ConfigurationError(
                    f"{name} must look like '.ext'", context={name: suffix}
                )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineSettings":
        """Resolve settings from defaults plus environment overrides.

        Unparseable or non-positive values are ignored.
        """
        env = os.environ if environ is None else environ
        settings = cls()
        overrides: dict[str, Any] = {}

        batch_size = _parse_positive_int(env.get(f"{ENV_PREFIX}BATCH_SIZE"))
        if batch_size is not None:
            overrides["batch_size"] = batch_size
        max_size = _parse_positive_int(env.get(f"{ENV_PREFIX}CACHE_MAX_SIZE"))
        if max_size is not None:
            overrides["cache_max_size"] = max_size
        ttl = _parse_positive_float(env.get(f"{ENV_PREFIX}CACHE_TTL_SECONDS"))
        if ttl is not None:
            overrides["cache_ttl_seconds"] = ttl
        incremental = parse_bool(env.get(f"{ENV_PREFIX}INCREMENTAL"))
        if incremental is not None:
            overrides["incremental"] = incremental

        return replace(settings, **overrides) if overrides else settings


def resolve_templates_dir(
    explicit: Optional[Path | str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Path:
    """Resolve the template library root.

    Precedence: explicit argument, ``RULES_KIT_TEMPLATES_DIR``, bundled data.
    """
    if explicit:
        return Path(explicit).expanduser().resolve()
    env = os.environ if environ is None else environ
    from_env = env.get(TEMPLATES_DIR_ENV)
    if from_env:
        return Path(from_env).expanduser().resolve()

    from rules_kit.data import get_data_path

    return get_data_path("templates")


__all__ = ["EngineSettings", "parse_bool", "resolve_templates_dir", "TEMPLATES_DIR_ENV"]

"""Configuration store for the kit configuration document.

The store is owned by an engine instance. ``load()`` memoizes the first
result on the instance; later calls return it regardless of the directory
argument until ``reload()`` or a successful ``save()``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from rules_kit.core.results import ReadStatus
from rules_kit.core.utils.io import read_yaml, write_yaml

from .defaults import default_config_mapping
from .models import RuleConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = ("kit-config.yaml", "kit-config.yml", "kit-config.json")


@dataclass(frozen=True)
class ConfigLoadResult:
    """Outcome of reading the configuration document.

    ``config`` is always usable: on any non-OK status it holds the
    built-in defaults.
    """

    config: RuleConfig
    status: ReadStatus
    path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def from_defaults(self) -> bool:
        return self.status is not ReadStatus.OK


def find_config_file(templates_dir: Path) -> Optional[Path]:
    """Return the first existing configuration file in ``templates_dir``."""
    for name in CONFIG_FILENAMES:
        candidate = Path(templates_dir) / name
        if candidate.is_file():
            return candidate
    return None


def default_config() -> RuleConfig:
    return RuleConfig.from_mapping(default_config_mapping())


class RuleConfigStore:
    """Loads, memoizes and saves the kit configuration for one engine."""

    def __init__(self, templates_dir: Path) -> None:
        self.templates_dir = Path(templates_dir)
        self._result: Optional[ConfigLoadResult] = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def load_result(self, templates_dir: Optional[Path] = None) -> ConfigLoadResult:
        if self._result is not None:
            return self._result
        self._result = self._read(Path(templates_dir) if templates_dir else self.templates_dir)
        return self._result

    def load(self, templates_dir: Optional[Path] = None) -> RuleConfig:
        return self.load_result(templates_dir).config

    def reload(self) -> RuleConfig:
        self._result = None
        return self.load()

    @property
    def config_path(self) -> Optional[Path]:
        """Path of the loaded document, if one was read."""
        return self._result.path if self._result is not None else None

    def _read(self, directory: Path) -> ConfigLoadResult:
        path = find_config_file(directory)
        if path is None:
            logger.debug("No kit configuration in %s; using built-in defaults", directory)
            return ConfigLoadResult(default_config(), ReadStatus.ABSENT, None, "not found")

        try:
            data = read_yaml(path, raise_on_error=True)
        except yaml.YAMLError as exc:
            logger.warning("Failed to parse kit configuration %s: %s", path, exc)
            return ConfigLoadResult(default_config(), ReadStatus.MALFORMED, path, str(exc))
        except OSError as exc:
            logger.warning("Failed to read kit configuration %s: %s", path, exc)
            return ConfigLoadResult(default_config(), ReadStatus.IO_ERROR, path, str(exc))

        if not isinstance(data, dict):
            logger.warning("Kit configuration %s is not a mapping; using built-in defaults", path)
            return ConfigLoadResult(
                default_config(), ReadStatus.MALFORMED, path, "top-level value is not a mapping"
            )

        return ConfigLoadResult(RuleConfig.from_mapping(data), ReadStatus.OK, path)

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------
    def save(self, config: RuleConfig, templates_dir: Optional[Path] = None) -> bool:
        """Write ``config`` to disk and make it the memoized value.

        Returns False (leaving the memoized value untouched) when the
        document cannot be written.
        """
        directory = Path(templates_dir) if templates_dir else self.templates_dir
        target = self.config_path if templates_dir is None else None
        if target is None:
            target = find_config_file(directory) or directory / CONFIG_FILENAMES[0]

        try:
            write_yaml(target, config.to_dict())
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Failed to save kit configuration %s: %s", target, exc)
            return False

        self._result = ConfigLoadResult(config, ReadStatus.OK, target)
        logger.debug("Saved kit configuration to %s", target)
        return True


__all__ = [
    "CONFIG_FILENAMES",
    "ConfigLoadResult",
    "RuleConfigStore",
    "default_config",
    "find_config_file",
]

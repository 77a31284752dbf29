from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

_CONFIGURED_TARGET: str | None = None
_RULES_KIT_HANDLER: logging.Handler | None = None

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = getattr(logging, str(name).upper(), None)
    if isinstance(level, int):
        return level
    return logging.WARNING


def configure_stdlib_logging(*, level: str = "WARNING", log_path: Optional[Path] = None) -> None:
    """Install a single Rules Kit handler on the ``rules_kit`` logger.

    Logs go to stderr (never stdout, which carries command output) or to
    ``log_path`` when given. Idempotent per-process for the same target;
    switching targets replaces the previously installed handler.
    """
    global _CONFIGURED_TARGET, _RULES_KIT_HANDLER

    target = str(Path(log_path).resolve()) if log_path is not None else "<stderr>"
    logger = logging.getLogger("rules_kit")
    logger.setLevel(_level_from_name(level))

    if _CONFIGURED_TARGET == target and _RULES_KIT_HANDLER is not None:
        _RULES_KIT_HANDLER.setLevel(_level_from_name(level))
        return

    if _RULES_KIT_HANDLER is not None:
        logger.removeHandler(_RULES_KIT_HANDLER)
        _RULES_KIT_HANDLER.close()
        _RULES_KIT_HANDLER = None

    handler: logging.Handler
    if log_path is not None:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(target, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    _RULES_KIT_HANDLER = handler
    _CONFIGURED_TARGET = target


def level_for_flags(*, verbose: bool = False, debug: bool = False) -> str:
    """Map CLI verbosity flags to a level name."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    return "WARNING"


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the installed handler."""
    global _CONFIGURED_TARGET, _RULES_KIT_HANDLER
    logger = logging.getLogger("rules_kit")
    if _RULES_KIT_HANDLER is not None:
        logger.removeHandler(_RULES_KIT_HANDLER)
        _RULES_KIT_HANDLER.close()
    logger.setLevel(logging.NOTSET)
    _CONFIGURED_TARGET = None
    _RULES_KIT_HANDLER = None


__all__ = [
    "configure_stdlib_logging",
    "level_for_flags",
    "reset_stdlib_logging_for_tests",
]

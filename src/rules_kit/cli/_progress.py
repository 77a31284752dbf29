"""CLI progress helpers.

Progress is written to stderr only, so stdout (and JSON output) stays clean.
It is shown when stderr is a terminal unless ``RULES_KIT_CLI_PROGRESS``
says otherwise.
"""

from __future__ import annotations

import os
import sys
from typing import Optional, TextIO

from rules_kit.core.config.settings import parse_bool


def progress_enabled(stream: Optional[TextIO] = None) -> bool:
    env = parse_bool(os.environ.get("RULES_KIT_CLI_PROGRESS"))
    if env is not None:
        return env
    stream = stream or sys.stderr
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class ProgressCounter:
    """Callable ``(completed, total)`` sink that renders ``n/total`` on one line."""

    def __init__(self, label: str = "Rules", *, stream: Optional[TextIO] = None,
                 enabled: Optional[bool] = None) -> None:
        self.label = label
        self.stream = stream or sys.stderr
        self.enabled = progress_enabled(self.stream) if enabled is None else enabled
        self.last: tuple[int, int] = (0, 0)

    def __call__(self, completed: int, total: int) -> None:
        self.last = (completed, total)
        if not self.enabled:
            return
        self.stream.write(f"\r{self.label}: {completed}/{total}")
        self.stream.flush()

    def finish(self) -> None:
        if self.enabled and self.last != (0, 0):
            self.stream.write("\n")
            self.stream.flush()


__all__ = ["ProgressCounter", "progress_enabled"]

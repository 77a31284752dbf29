"""Literal ``{placeholder}`` substitution in rule bodies.

Only a fixed set of names is recognised. A placeholder is replaced (every
occurrence) when its value is present and non-empty; otherwise it is left
verbatim. There is no other template syntax.
"""
from __future__ import annotations

from typing import Dict, Optional

from .paths import normalize_project_path
from .types import RunContext

PLACEHOLDERS = (
    "detectedVersion",
    "versionRange",
    "projectPath",
    "cursorPath",
    "stack",
    "architecture",
    "stackFormatted",
)


def format_stack_name(stack: Optional[str]) -> str:
    if not stack:
        return ""
    return " ".join(part[:1].upper() + part[1:] for part in stack.split("-"))


def placeholder_values(run: RunContext) -> Dict[str, Optional[str]]:
    """Values for each supported placeholder (None when not supplied)."""
    return {
        "detectedVersion": run.detected_version,
        "versionRange": run.formatted_version_name or run.version_range,
        "projectPath": normalize_project_path(run.project_path),
        "cursorPath": run.cursor_path,
        "stack": run.stack,
        "architecture": run.architecture,
        "stackFormatted": format_stack_name(run.stack),
    }


def substitute(body: str, values: Dict[str, Optional[str]]) -> str:
    """Replace ``{name}`` tokens for every name with a non-empty value."""
    for name in PLACEHOLDERS:
        value = values.get(name)
        if value is None or str(value) == "":
            continue
        body = body.replace("{" + name + "}", str(value))
    return body


def substitute_for_run(body: str, run: RunContext) -> str:
    return substitute(body, placeholder_values(run))


__all__ = [
    "PLACEHOLDERS",
    "format_stack_name",
    "placeholder_values",
    "substitute",
    "substitute_for_run",
]

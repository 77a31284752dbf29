"""Path helpers: project-path normalization, ``<root>`` globs, output layout."""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .types import RunContext, SourceDocument, Tier

ROOT_PLACEHOLDER = "<root>/"
RULES_DIR = Path(".cursor") / "rules" / "rules-kit"
GLOBAL_DIR = "global"
MCP_DIR = "mcp-tools"

_CURRENT_DIR_FORMS = {"", ".", "./"}


def normalize_project_path(project_path: Optional[str]) -> str:
    """Normalize the project path for placeholders and frontmatter.

    An absent value or the current directory (``.``) becomes ``./``; any
    other value is returned unchanged.
    """
    if project_path is None or project_path.strip() in _CURRENT_DIR_FORMS:
        return "./"
    return project_path


def glob_prefix(project_path: Optional[str]) -> str:
    """Return the prefix substituted for ``<root>/`` in glob patterns.

    >>> glob_prefix(".")
    './'
    >>> glob_prefix("api/")
    'api/'
    >>> glob_prefix("apps/web")
    'apps/web/'
    """
    normalized = normalize_project_path(project_path)
    if normalized == "./":
        return normalized
    return normalized.rstrip("/") + "/"


def apply_root(glob: str, project_path: Optional[str]) -> str:
    """Replace every ``<root>/`` segment in ``glob`` with the project prefix."""
    return glob.replace(ROOT_PLACEHOLDER, glob_prefix(project_path))


def format_rules_path(base: Union[str, Path, None]) -> Path:
    """Return the rules-kit output directory below ``base``.

    ``format_rules_path(".")`` is the relative ``.cursor/rules/rules-kit``.
    """
    if base is None or str(base).strip() in _CURRENT_DIR_FORMS:
        return RULES_DIR
    return Path(base) / RULES_DIR


def rules_root(run: RunContext) -> Path:
    """Absolute output root for a run: ``<workspace>/<cursor_path>/.cursor/rules/rules-kit``."""
    cursor = run.cursor_path
    base = Path(run.workspace)
    if cursor and cursor.strip() not in _CURRENT_DIR_FORMS:
        base = base / cursor
    return format_rules_path(base)


def output_name(doc: SourceDocument, output_suffix: str) -> str:
    """Destination file name for a source document.

    Feature-tier files carry a prefix so they do not collide with base
    rules of the same name in the stack directory.
    """
    stem = doc.stem
    if doc.tier is Tier.STATE_MANAGEMENT:
        stem = f"state-{doc.label}-{stem}" if doc.label else f"state-{stem}"
    elif doc.tier is Tier.TESTING:
        stem = f"testing-{stem}"
    elif doc.tier is Tier.SIGNALS:
        stem = f"signals-{stem}"
    return stem + output_suffix


def output_path(doc: SourceDocument, run: RunContext, output_suffix: str) -> Path:
    root = rules_root(run)
    name = output_name(doc, output_suffix)
    if doc.tier is Tier.GLOBAL:
        return root / GLOBAL_DIR / name
    if doc.tier is Tier.MCP:
        return root / MCP_DIR / (doc.label or "") / name
    return root / run.stack / name


__all__ = [
    "ROOT_PLACEHOLDER",
    "normalize_project_path",
    "glob_prefix",
    "apply_root",
    "format_rules_path",
    "rules_root",
    "output_name",
    "output_path",
]

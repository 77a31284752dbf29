"""Frontmatter parsing utilities for rule documents.

Rule templates and generated ``.mdc`` files start with a small metadata
block delimited by ``---`` lines. The block is NOT full YAML: glob values
such as ``**/*.php,routes/**`` are not valid YAML scalars, so the block is
read with a line-oriented grammar instead::

    block   := line ( "\\n" line )*    (only "\\n" separates lines)
    line    := key ':' value          (lines without a colon are skipped)
    value   := array | bool | quoted | raw
    array   := '[' ( item ( ',' item )* )? ']'
    item    := quoted | bare
    bool    := 'true' | 'false'
    quoted  := "'" ( char | "''" )* "'"  |  '"' ( char | '\\' char )* '"'

Example:
    ```
    ---
    description: 'Controller conventions'
    globs: app/Http/Controllers/**/*.php
    alwaysApply: false
    ---

    # Controllers
    ```
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Union

FrontmatterValue = Union[str, bool, List[str]]

DELIMITER = "---"

# Closing delimiter: a line made only of the three dashes
_CLOSING_PATTERN = re.compile(r"^---[ \t]*$", re.MULTILINE)

# Characters that force single-quoting when a string is serialized
_STRUCTURAL_CHARS = set(":#,'\"[]{}")

_DOUBLE_QUOTE_ESCAPE = re.compile(r"\\(.)")


@dataclass
class ParsedDocument:
    """Result of parsing a document with a frontmatter block.

    Attributes:
        frontmatter: Parsed key/value pairs in source order
        content: The body after the closing delimiter (trimmed)
        raw_frontmatter: The raw block text (for debugging)
        skipped_lines: Block lines that had no ``key: value`` shape
    """

    frontmatter: Dict[str, FrontmatterValue]
    content: str
    raw_frontmatter: str
    skipped_lines: List[str] = field(default_factory=list)


def _unquote(value: str) -> str:
    quote = value[0]
    inner = value[1:-1]
    if quote == "'":
        return inner.replace("''", "'")
    return _DOUBLE_QUOTE_ESCAPE.sub(r"\1", inner)


def _is_quoted(value: str) -> bool:
    return len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"')


def _read_quoted(text: str, start: int) -> tuple[str, int]:
    """Read a quoted item beginning at ``start``; return (value, next_index)."""
    quote = text[start]
    i = start + 1
    chars: List[str] = []
    while i < len(text):
        ch = text[i]
        if quote == "'" and ch == "'":
            if i + 1 < len(text) and text[i + 1] == "'":
                chars.append("'")
                i += 2
                continue
            return "".join(chars), i + 1
        if quote == '"' and ch == "\\" and i + 1 < len(text):
            chars.append(text[i + 1])
            i += 2
            continue
        if quote == '"' and ch == '"':
            return "".join(chars), i + 1
        chars.append(ch)
        i += 1
    # Unterminated quote: keep what was read
    return "".join(chars), i


def _parse_array(inner: str) -> List[str]:
    items: List[str] = []
    i = 0
    n = len(inner)
    while i < n:
        while i < n and inner[i].isspace():
            i += 1
        if i >= n:
            break
        if inner[i] in ("'", '"'):
            item, i = _read_quoted(inner, i)
            items.append(item)
            # Skip anything up to the separator
            comma = inner.find(",", i)
            i = n if comma == -1 else comma + 1
            continue
        comma = inner.find(",", i)
        end = n if comma == -1 else comma
        bare = inner[i:end].strip()
        if bare:
            items.append(bare.strip("'\""))
        i = end + 1
    return items


def parse_value(raw: str) -> FrontmatterValue:
    """Parse one frontmatter value (array, boolean, quoted or raw string)."""
    value = raw.strip()
    if value.startswith("[") and value.endswith("]"):
        return _parse_array(value[1:-1])
    if value == "true":
        return True
    if value == "false":
        return False
    if _is_quoted(value):
        return _unquote(value)
    return value


def _parse_block(block: str) -> tuple[Dict[str, FrontmatterValue], List[str]]:
    data: Dict[str, FrontmatterValue] = {}
    skipped: List[str] = []
    # Only "\n" ends a line; other separators may appear inside values
    for line in block.split("\n"):
        stripped = line.strip()
        if not stripped:
            continue
        key, sep, value = stripped.partition(":")
        key = key.strip()
        if not sep or not key:
            skipped.append(line)
            continue
        data[key] = parse_value(value)
    return data, skipped


def parse_frontmatter(content: str) -> ParsedDocument:
    """Split ``content`` into frontmatter and body.

    When ``content`` does not start with the ``---`` delimiter (or the block
    is never closed), the frontmatter is empty and the content is returned
    unchanged.

    Example:
        >>> doc = parse_frontmatter("---\\nglobs: app/**/*.php\\nalwaysApply: true\\n---\\n\\n# Title")
        >>> doc.frontmatter
        {'globs': 'app/**/*.php', 'alwaysApply': True}
        >>> doc.content
        '# Title'
    """
    if not content.startswith(DELIMITER):
        return ParsedDocument(frontmatter={}, content=content, raw_frontmatter="")

    first_newline = content.find("\n")
    if first_newline == -1:
        return ParsedDocument(frontmatter={}, content=content, raw_frontmatter="")

    closing = _CLOSING_PATTERN.search(content, first_newline + 1)
    if closing is None:
        return ParsedDocument(frontmatter={}, content=content, raw_frontmatter="")

    raw_block = content[first_newline + 1:closing.start()].strip()
    body = content[closing.end():].strip()
    data, skipped = _parse_block(raw_block)
    return ParsedDocument(
        frontmatter=data,
        content=body,
        raw_frontmatter=raw_block,
        skipped_lines=skipped,
    )


def _quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def _needs_quotes(value: str) -> bool:
    if value == "" or value != value.strip():
        return True
    if value in ("true", "false"):
        return True
    return any(ch in _STRUCTURAL_CHARS for ch in value)


def format_value(value: Any) -> str:
    """Render one value the way :func:`parse_value` reads it back."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        return "[ " + ", ".join(_quote(str(item)) for item in value) + " ]"
    text = str(value)
    if "\n" in text or "\r" in text:
        raise ValueError("Frontmatter values must be single-line")
    return _quote(text) if _needs_quotes(text) else text


def format_frontmatter(data: Mapping[str, Any], *, exclude_none: bool = True) -> str:
    """Format a mapping as a ``---`` delimited block (with trailing newline)."""
    lines = [DELIMITER]
    for key, value in data.items():
        if value is None and exclude_none:
            continue
        if not key or key != key.strip() or any(ch in key for ch in ":\n\r"):
            raise ValueError(f"Invalid frontmatter key: {key!r}")
        lines.append(f"{key}: {format_value(value)}")
    lines.append(DELIMITER)
    return "\n".join(lines) + "\n"


def serialize_frontmatter(data: Mapping[str, Any], body: str) -> str:
    """Render a full document: frontmatter block, blank line, body."""
    text = format_frontmatter(data) + "\n" + body
    if body and not body.endswith("\n"):
        text += "\n"
    return text


def has_frontmatter(content: str) -> bool:
    """Check if content starts with a closed frontmatter block."""
    if not content.startswith(DELIMITER):
        return False
    first_newline = content.find("\n")
    if first_newline == -1:
        return False
    return _CLOSING_PATTERN.search(content, first_newline + 1) is not None


__all__ = [
    "FrontmatterValue",
    "ParsedDocument",
    "parse_value",
    "parse_frontmatter",
    "format_value",
    "format_frontmatter",
    "serialize_frontmatter",
    "has_frontmatter",
    "DELIMITER",
]

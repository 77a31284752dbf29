"""Text utilities (frontmatter codec)."""
from .frontmatter import (
    DELIMITER,
    FrontmatterValue,
    ParsedDocument,
    format_frontmatter,
    format_value,
    has_frontmatter,
    parse_frontmatter,
    parse_value,
    serialize_frontmatter,
)

__all__ = [
    "DELIMITER",
    "FrontmatterValue",
    "ParsedDocument",
    "format_frontmatter",
    "format_value",
    "has_frontmatter",
    "parse_frontmatter",
    "parse_value",
    "serialize_frontmatter",
]

from __future__ import annotations

import pytest

from rules_kit.core.utils.text import (
    format_frontmatter,
    format_value,
    has_frontmatter,
    parse_frontmatter,
    parse_value,
    serialize_frontmatter,
)


# ---------------------------------------------------------------------------
# parse_value: one test per value kind
# ---------------------------------------------------------------------------


def test_parse_value_raw_string_is_kept_verbatim() -> None:
    assert parse_value(" app/**/*.php,routes/**/*.php ") == "app/**/*.php,routes/**/*.php"


def test_parse_value_booleans() -> None:
    assert parse_value("true") is True
    assert parse_value("false") is False
    # Only the exact literals are booleans
    assert parse_value("True") == "True"


def test_parse_value_single_quoted_unwraps_and_undoubles() -> None:
    assert parse_value("'it''s: fine'") == "it's: fine"


def test_parse_value_double_quoted_unescapes() -> None:
    assert parse_value('"say \\"hi\\""') == 'say "hi"'


def test_parse_value_quoted_boolean_stays_string() -> None:
    assert parse_value("'true'") == "true"


def test_parse_value_array_strips_quotes_from_items() -> None:
    assert parse_value("[ 'a', \"b\", c ]") == ["a", "b", "c"]


def test_parse_value_array_keeps_commas_inside_quotes() -> None:
    assert parse_value("[ 'src/**/*.{ts,tsx}', 'x' ]") == ["src/**/*.{ts,tsx}", "x"]


def test_parse_value_empty_array() -> None:
    assert parse_value("[]") == []
    assert parse_value("[ ]") == []


def test_parse_value_mismatched_quotes_are_raw() -> None:
    assert parse_value("'half\"") == "'half\""


# ---------------------------------------------------------------------------
# parse_frontmatter
# ---------------------------------------------------------------------------


def test_text_without_delimiter_is_returned_unchanged() -> None:
    text = "# Title\n\nbody\n"
    doc = parse_frontmatter(text)
    assert doc.frontmatter == {}
    assert doc.content == text


def test_unclosed_block_is_returned_unchanged() -> None:
    text = "---\nglobs: x\n# Title\n"
    doc = parse_frontmatter(text)
    assert doc.frontmatter == {}
    assert doc.content == text
    assert has_frontmatter(text) is False


def test_block_and_body_are_split_and_trimmed() -> None:
    text = "---\ndescription: Controllers\nglobs: app/**/*.php\nalwaysApply: true\n---\n\n# Title\n\n"
    doc = parse_frontmatter(text)
    assert doc.frontmatter == {
        "description": "Controllers",
        "globs": "app/**/*.php",
        "alwaysApply": True,
    }
    assert doc.content == "# Title"
    assert has_frontmatter(text) is True


def test_value_is_split_at_first_colon_only() -> None:
    doc = parse_frontmatter("---\ndescription: Use: wisely\n---\nbody")
    assert doc.frontmatter["description"] == "Use: wisely"


def test_lines_without_colon_are_skipped_not_errors() -> None:
    doc = parse_frontmatter("---\nnot a pair\nglobs: x\n# no colon\n\n---\nbody")
    assert doc.frontmatter == {"globs": "x"}
    assert doc.skipped_lines == ["not a pair", "# no colon"]


def test_hash_prefixed_key_is_a_regular_key() -> None:
    doc = parse_frontmatter("---\n#tag: x\n---\nbody")
    assert doc.frontmatter == {"#tag": "x"}


def test_only_newline_separates_block_lines() -> None:
    doc = parse_frontmatter("---\ndescription: form\x0cfeed\r\nglobs: x\n---\nbody")
    assert doc.frontmatter == {"description": "form\x0cfeed", "globs": "x"}


def test_dashes_inside_body_do_not_end_block_early() -> None:
    doc = parse_frontmatter("---\na: 1\n---\nintro\n---\nmore")
    assert doc.frontmatter == {"a": "1"}
    assert doc.content == "intro\n---\nmore"


# ---------------------------------------------------------------------------
# serialization
# ---------------------------------------------------------------------------


def test_format_value_shapes() -> None:
    assert format_value(True) == "true"
    assert format_value(["a", "b"]) == "[ 'a', 'b' ]"
    assert format_value([]) == "[]"
    assert format_value("plain/**/*.php") == "plain/**/*.php"
    assert format_value("a,b") == "'a,b'"
    assert format_value("true") == "'true'"
    assert format_value("") == "''"
    assert format_value("it's") == "'it''s'"


def test_format_value_rejects_multiline() -> None:
    with pytest.raises(ValueError):
        format_value("one\ntwo")


def test_format_frontmatter_rejects_bad_keys() -> None:
    with pytest.raises(ValueError):
        format_frontmatter({"a:b": "x"})
    with pytest.raises(ValueError):
        format_frontmatter({" padded": "x"})
    with pytest.raises(ValueError):
        format_frontmatter({"a\rb": "x"})


def test_format_frontmatter_drops_none_values() -> None:
    assert format_frontmatter({"a": None, "b": "x"}) == "---\nb: x\n---\n"


def test_serialize_layout() -> None:
    text = serialize_frontmatter({"globs": "**/*", "alwaysApply": False}, "# Body")
    assert text == "---\nglobs: **/*\nalwaysApply: false\n---\n\n# Body\n"


@pytest.mark.parametrize(
    "frontmatter",
    [
        {"globs": "./app/**/*.php,./routes/**/*.php", "alwaysApply": True},
        {"description": "Quotes 'inside' and \"double\"", "alwaysApply": False},
        {"globs": ["src/**/*.{ts,tsx}", "it's/**"], "tags": []},
        {"description": "true", "note": "  padded  ", "empty": ""},
        {"path": "C:\\temp\\x", "hash": "#not-a-comment", "braces": "{x}"},
        {"description": "line\u2028sep"},
        {"description": "form\x0cfeed", "other": "vt\x0btab"},
        {"description": "a\x85b", "groups": "x\x1cy\x1dz\x1e"},
        {"#tag": "x"},
        {"edge": "\u2029trailing\u2029"},
    ],
)
def test_round_trip(frontmatter: dict) -> None:
    body = "# Title\n\nSome text with --- and key: value lines."
    doc = parse_frontmatter(serialize_frontmatter(frontmatter, body))
    assert doc.frontmatter == frontmatter
    assert doc.content == body

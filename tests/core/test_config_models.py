from __future__ import annotations

from rules_kit.core.config import RuleConfig, default_config


def test_version_ranges_accept_mapping_and_bare_string() -> None:
    config = RuleConfig.from_mapping(
        {
            "laravel": {
                "version_ranges": {
                    11: {"range_name": "v10-11", "name": "Laravel 10-11"},
                    "12": "v12",
                    "13": {"name": "no range name"},
                    "bad": 5,
                }
            }
        }
    )
    ranges = config.stack("laravel").version_ranges

    assert ranges["11"].range_name == "v10-11"
    assert ranges["11"].name == "Laravel 10-11"
    assert ranges["12"].range_name == "v12"
    assert ranges["13"].range_name == "13"
    assert "bad" not in ranges


def test_pattern_rules_accept_string_or_list() -> None:
    config = RuleConfig.from_mapping(
        {
            "laravel": {
                "pattern_rules": {
                    "<root>/routes/**/*.php": "routes.md",
                    "<root>/app/Http/Controllers/**/*.php": ["controllers/controller-methods.md"],
                }
            }
        }
    )
    stack = config.stack("laravel")

    assert stack.match_pattern("routes.md") == "<root>/routes/**/*.php"
    # Only the last path segment of an identifier is compared
    assert stack.match_pattern("controller-methods.md") == "<root>/app/Http/Controllers/**/*.php"
    assert stack.match_pattern("other.md") is None


def test_first_matching_pattern_wins() -> None:
    config = RuleConfig.from_mapping(
        {"s": {"pattern_rules": {"first/**": ["x.md"], "second/**": ["x.md"]}}}
    )
    assert config.stack("s").match_pattern("x.md") == "first/**"


def test_malformed_entries_are_ignored() -> None:
    config = RuleConfig.from_mapping(
        {
            "global": "not a mapping",
            "broken": ["not", "a", "mapping"],
            "laravel": {"globs": "<root>/app/**/*.php", "architectures": {"ddd": "bad", "hex": None}},
        }
    )

    assert config.always == ()
    assert "broken" not in config.stacks
    laravel = config.stack("laravel")
    assert laravel.globs == ("<root>/app/**/*.php",)
    assert "ddd" not in laravel.architectures
    assert laravel.architecture("hex").globs == ()


def test_non_mapping_document_is_empty_config() -> None:
    assert RuleConfig.from_mapping(None).stacks == {}


def test_mcp_tools_are_not_stacks() -> None:
    config = RuleConfig.from_mapping({"mcp_tools": {"github": {"name": "GitHub"}}})
    assert config.stacks == {}
    assert config.mcp_tools["github"].name == "GitHub"


def test_with_always_deduplicates_in_order() -> None:
    config = RuleConfig.from_mapping({}).with_always(["b.md", "a.md", "b.md"])
    assert config.always == ("b.md", "a.md")


def test_default_config_has_minimal_stacks() -> None:
    config = default_config()
    assert set(config.stacks) == {"laravel", "nextjs", "react"}
    assert config.stack("laravel").version_ranges["11"].range_name == "v10-11"

"""
rules-kit stacks show command.

SUMMARY: Show architectures, versions and MCP tools for a stack
"""

from __future__ import annotations

import argparse
import sys

from rules_kit.cli import (
    OutputFormatter,
    add_json_flag,
    add_templates_dir_flag,
    build_engine,
)
from rules_kit.core.exceptions import RulesKitError
from rules_kit.core.composition.resolver import FEATURE_STACKS

SUMMARY = "Show architectures, versions and MCP tools for a stack"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("stack", help="Stack name (e.g. laravel)")
    add_templates_dir_flag(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        engine = build_engine(args)
        catalog = engine.catalog
        if args.stack not in catalog.available_stacks():
            formatter.error(ValueError(f"Unknown stack: {args.stack}"), error_code="unknown_stack")
            return 1
        architectures = catalog.available_architectures(args.stack)
        versions = catalog.available_versions(args.stack)
        tools = catalog.available_mcp_tools()
    except RulesKitError as e:
        formatter.error(e, error_code="stacks_show_error")
        return 1

    features = sorted(tier.value for tier, stacks in FEATURE_STACKS.items() if args.stack in stacks)
    if formatter.json_mode:
        formatter.json_output(
            {
                "stack": args.stack,
                "architectures": [c.to_dict() for c in architectures],
                "versions": [
                    {**c.to_dict(), "range": catalog.map_version_to_range(args.stack, c.value)}
                    for c in versions
                ],
                "features": features,
                "mcpTools": [c.to_dict() for c in tools],
            }
        )
        return 0

    formatter.text(args.stack)
    formatter.text("Architectures:")
    for choice in architectures:
        formatter.text_kv(choice.value, choice.name)
    formatter.text("Versions:")
    for choice in versions:
        formatter.text_kv(choice.value, choice.name)
    if features:
        formatter.text(f"Features: {', '.join(features)}")
    if tools:
        formatter.text("MCP tools:")
        for choice in tools:
            formatter.text_kv(choice.value, choice.name)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))

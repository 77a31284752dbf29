"""
rules-kit config show command.

SUMMARY: Show the kit configuration

Displays the kit configuration read from the template library, or the
built-in defaults when no configuration document can be read.
"""

from __future__ import annotations

import argparse
import sys

import yaml

from rules_kit.cli import (
    OutputFormatter,
    add_json_flag,
    add_templates_dir_flag,
    build_engine,
)
from rules_kit.core.exceptions import RulesKitError

SUMMARY = "Show the kit configuration"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "stack",
        nargs="?",
        help="Only show the entry for this stack",
    )
    add_templates_dir_flag(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    """Show configuration - delegates to RuleConfigStore."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        engine = build_engine(args)
        result = engine.store.load_result()
    except RulesKitError as e:
        formatter.error(e, error_code="config_show_error")
        return 1

    data = result.config.to_dict()
    if args.stack:
        if args.stack not in data:
            formatter.error(KeyError(args.stack), f"Stack not configured: {args.stack}")
            return 1
        data = {args.stack: data[args.stack]}

    if formatter.json_mode:
        formatter.json_output(
            {
                "source": str(result.path) if result.path else None,
                "status": result.status.value,
                "config": data,
            }
        )
        return 0

    source = str(result.path) if result.path else "built-in defaults"
    formatter.text(f"# source: {source} ({result.status.value})")
    formatter.text(
        yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True).rstrip()
    )
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))

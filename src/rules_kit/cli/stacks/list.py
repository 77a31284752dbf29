"""
rules-kit stacks list command.

SUMMARY: List available stacks
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

SUMMARY = "List available stacks"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_templates_dir_flag(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        engine = build_engine(args)
        stacks = engine.catalog.available_stacks()
    except RulesKitError as e:
        formatter.error(e, error_code="stacks_list_error")
        return 1

    if formatter.json_mode:
        formatter.json_output({"stacks": stacks})
    else:
        for stack in stacks:
            formatter.text(stack)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))

"""
rules-kit rules count command.

SUMMARY: Count the rules a generate run would produce
"""

from __future__ import annotations

import argparse
import sys

from rules_kit.cli import (
    OutputFormatter,
    add_json_flag,
    add_selection_args,
    add_verbosity_flags,
    build_engine,
    configure_logging,
    run_context_from_args,
)
from rules_kit.core.exceptions import RulesKitError

SUMMARY = "Count the rules a generate run would produce"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_selection_args(parser)
    add_json_flag(parser)
    add_verbosity_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    configure_logging(args)

    try:
        engine = build_engine(args)
        run = run_context_from_args(args)
        count = engine.count_rules(run)
    except RulesKitError as e:
        formatter.error(e, error_code="rules_count_error")
        return 1

    formatter.success({"stack": run.stack, "count": count}, str(count))
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))

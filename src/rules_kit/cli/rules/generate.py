"""
rules-kit rules generate command.

SUMMARY: Generate rule files for a stack

Composes rules from the template library (global, base, version,
architecture and feature tiers) and writes them below
``<cursor-path>/.cursor/rules/rules-kit``. Up-to-date rules are skipped
unless --force is given.
"""

from __future__ import annotations

import argparse
import sys

from rules_kit.cli import (
    OutputFormatter,
    ProgressCounter,
    add_force_flag,
    add_json_flag,
    add_selection_args,
    add_verbosity_flags,
    build_engine,
    configure_logging,
    run_context_from_args,
)
from rules_kit.core.composition.paths import rules_root
from rules_kit.core.exceptions import RulesKitError

SUMMARY = "Generate rule files for a stack"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_selection_args(parser)
    add_force_flag(parser)
    add_json_flag(parser)
    add_verbosity_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Generate rules - delegates to RulesKitEngine."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    configure_logging(args)

    try:
        engine = build_engine(args)
        run = run_context_from_args(args)
        total = engine.count_rules(run)
        progress = ProgressCounter("Generating rules")
        try:
            report = engine.generate_sync(run, progress, incremental=not args.force)
        finally:
            progress.finish()
    except RulesKitError as e:
        formatter.error(e, error_code="rules_generate_error")
        return 1

    data = {
        "stack": run.stack,
        "rulesDir": str(rules_root(run)),
        "planned": total,
        **report.to_dict(),
    }
    if not report.success:
        formatter.success(
            data,
            f"Generated {len(report.written)} rule(s), skipped {len(report.skipped)}, "
            f"{len(report.failed)} failed",
            status="partial",
        )
        for failed in report.failed:
            print(f"Failed: {failed}", file=sys.stderr)
        return 1

    formatter.success(
        data,
        f"Generated {len(report.written)} rule(s) for {run.stack} "
        f"({len(report.skipped)} up to date) in {rules_root(run)}",
    )
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))

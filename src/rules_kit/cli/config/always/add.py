"""
rules-kit config always add command.

SUMMARY: Add a file to the global always-apply list
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

SUMMARY = "Add a file to the global always-apply list"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("file", help="Global rule file name (e.g. README.md)")
    add_templates_dir_flag(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        engine = build_engine(args)
        config = engine.store.load()
    except RulesKitError as e:
        formatter.error(e, error_code="config_always_error")
        return 1

    if config.is_always(args.file):
        formatter.success({"always": list(config.always)}, f"{args.file} is already always-apply",
                          status="unchanged")
        return 0

    updated = config.with_always([*config.always, args.file])
    if not engine.store.save(updated):
        formatter.error(OSError("save failed"), "Could not save kit configuration",
                        error_code="config_save_error")
        return 1

    formatter.success(
        {"always": list(updated.always), "path": str(engine.store.config_path)},
        f"Added {args.file} to global.always",
    )
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))

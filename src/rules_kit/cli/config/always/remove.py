"""
rules-kit config always remove command.

SUMMARY: Remove a file from the global always-apply list
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

SUMMARY = "Remove a file from the global always-apply list"


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

    if not config.is_always(args.file):
        formatter.error(KeyError(args.file), f"{args.file} is not in global.always",
                        error_code="not_found")
        return 1

    updated = config.with_always(name for name in config.always if name != args.file)
    if not engine.store.save(updated):
        formatter.error(OSError("save failed"), "Could not save kit configuration",
                        error_code="config_save_error")
        return 1

    formatter.success(
        {"always": list(updated.always), "path": str(engine.store.config_path)},
        f"Removed {args.file} from global.always",
    )
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))

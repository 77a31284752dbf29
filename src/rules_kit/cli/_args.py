"""Common CLI argument registration utilities.

This module provides reusable argument registration functions shared by
rules-kit commands.
"""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_templates_dir_flag(parser: argparse.ArgumentParser) -> None:
    """Add --templates-dir flag overriding the bundled template library."""
    parser.add_argument(
        "--templates-dir",
        type=str,
        help="Template library root (default: bundled templates or $RULES_KIT_TEMPLATES_DIR)",
    )


def add_verbosity_flags(parser: argparse.ArgumentParser) -> None:
    """Add mutually exclusive --verbose / --debug flags and --log-file."""
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log progress information to stderr",
    )
    group.add_argument(
        "--debug",
        action="store_true",
        help="Log debug information to stderr",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Write log records to this file instead of stderr",
    )


def add_force_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--force",
        "-f",
        action="store_true",
        help="Rewrite every rule even if it is up to date",
    )


def add_selection_args(parser: argparse.ArgumentParser) -> None:
    """Add the flags that select which rules a run produces."""
    parser.add_argument("--stack", required=True, help="Stack to generate rules for (e.g. laravel)")
    parser.add_argument(
        "--version",
        dest="detected_version",
        help="Detected framework version (mapped to a version range)",
    )
    parser.add_argument(
        "--version-range",
        help="Version range directory to use directly (e.g. v10-11)",
    )
    parser.add_argument("--architecture", help="Architecture key (e.g. ddd, standard)")
    parser.add_argument(
        "--state-management",
        help="State management library rules to include (React only)",
    )
    parser.add_argument(
        "--testing",
        action="store_true",
        help="Include testing rules (React/Angular)",
    )
    parser.add_argument(
        "--signals",
        action="store_true",
        help="Include signals rules (Angular)",
    )
    parser.add_argument(
        "--global",
        dest="include_global",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Include global rules (default: on)",
    )
    parser.add_argument(
        "--mcp-tool",
        dest="mcp_tools",
        action="append",
        default=[],
        metavar="TOOL",
        help="Include rules for an MCP tool (repeatable)",
    )
    parser.add_argument(
        "--project-path",
        default=".",
        help="Application root relative to the repository (default: .)",
    )
    parser.add_argument(
        "--cursor-path",
        default=".",
        help="Directory holding .cursor, relative to the workspace (default: .)",
    )
    parser.add_argument(
        "--workspace",
        type=str,
        help="Repository root the rules are written into (default: current directory)",
    )
    add_templates_dir_flag(parser)


def workspace_from_args(args: argparse.Namespace) -> Path:
    raw: Optional[str] = getattr(args, "workspace", None)
    return Path(raw).expanduser().resolve() if raw else Path.cwd()


__all__ = [
    "add_json_flag",
    "add_templates_dir_flag",
    "add_verbosity_flags",
    "add_force_flag",
    "add_selection_args",
    "workspace_from_args",
]

"""
Auto-discovery CLI dispatcher for rules-kit.

Scans subfolders for commands and automatically registers them.
Adding new commands = just add a .py file to the appropriate subfolder.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from functools import lru_cache
from pathlib import Path
from typing import Any


@lru_cache(maxsize=1)
def discover_domains() -> dict[str, Path]:
    """
    Discover all CLI domain subfolders (rules, stacks, config).

    Returns:
        Dict mapping domain name to directory path
    """
    cli_dir = Path(__file__).parent
    domains = {}
    for item in cli_dir.iterdir():
        if item.is_dir() and not item.name.startswith("_"):
            # Must have at least one non-init .py file
            has_commands = any(
                f.suffix == ".py" and not f.name.startswith("_")
                for f in item.iterdir()
            )
            if has_commands:
                domains[item.name] = item
    return domains


def _load_command(module_name: str, default_summary: str) -> dict[str, Any] | None:
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        # Skip modules with import errors (will be caught during actual use)
        print(f"Warning: Could not import {module_name}: {e}", file=sys.stderr)
        return None
    return {
        "module": module,
        "summary": getattr(module, "SUMMARY", default_summary),
        "register_args": getattr(module, "register_args", None),
        "main": getattr(module, "main", None),
    }


@lru_cache(maxsize=32)
def discover_commands(domain: str) -> dict[str, dict[str, Any]]:
    """
    Discover all commands in a domain subfolder.

    Args:
        domain: Name of the domain (e.g., "rules", "stacks")

    Returns:
        Dict mapping command name to command info dict
    """
    domain_dir = Path(__file__).parent / domain
    commands: dict[str, dict[str, Any]] = {}

    for item in domain_dir.glob("*.py"):
        if item.name.startswith("_"):
            continue
        info = _load_command(f"rules_kit.cli.{domain}.{item.stem}", f"{domain} {item.stem}")
        if info is not None:
            commands[item.stem] = info

    return commands


@lru_cache(maxsize=32)
def discover_command_groups(domain: str) -> dict[str, dict[str, Any]]:
    """Discover command groups under a domain (one level deep).

    Example:
        cli/config/always/*.py => `rules-kit config always <subcommand>`
    """
    domain_dir = Path(__file__).parent / domain
    groups: dict[str, dict[str, Any]] = {}
    if not domain_dir.exists():
        return groups

    for subdir in domain_dir.iterdir():
        if not subdir.is_dir() or subdir.name.startswith("_"):
            continue
        if not (subdir / "__init__.py").exists():
            continue

        try:
            pkg = importlib.import_module(f"rules_kit.cli.{domain}.{subdir.name}")
        except ImportError as e:
            print(f"Warning: Could not import {domain}.{subdir.name} group: {e}", file=sys.stderr)
            continue
        doc = (getattr(pkg, "__doc__", None) or "").strip()
        summary = doc.splitlines()[0] if doc else ""

        subcommands: dict[str, dict[str, Any]] = {}
        for item in subdir.glob("*.py"):
            if item.name.startswith("_"):
                continue
            info = _load_command(
                f"rules_kit.cli.{domain}.{subdir.name}.{item.stem}",
                f"{domain} {subdir.name} {item.stem}",
            )
            if info is not None:
                subcommands[item.stem] = info

        if subcommands:
            groups[subdir.name] = {"summary": summary or f"{subdir.name} commands", "commands": subcommands}

    return groups


def _add_command(subparsers: Any, name: str, info: dict[str, Any]) -> argparse.ArgumentParser:
    primary_name = name.replace("_", "-")
    aliases = [name] if primary_name != name else []
    cmd_parser = subparsers.add_parser(primary_name, aliases=aliases, help=info["summary"])
    # Let module register its own arguments
    if info["register_args"]:
        info["register_args"](cmd_parser)
    # Set the main function as default handler
    if info["main"]:
        cmd_parser.set_defaults(_func=info["main"])
    return cmd_parser


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser with auto-discovered domains and commands.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="rules-kit",
        description="Agent Rules Kit - compose AI assistant rules for your stack",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(
        dest="domain",
        title="domains",
        description="Available command domains",
        metavar="<domain>",
    )

    for domain_name in sorted(discover_domains().keys()):
        domain_commands = discover_commands(domain_name)
        domain_groups = discover_command_groups(domain_name)
        if not domain_commands and not domain_groups:
            continue

        domain_parser = subparsers.add_parser(
            domain_name,
            help=f"{domain_name.title()} commands",
        )
        cmd_subparsers = domain_parser.add_subparsers(
            dest="command",
            title="commands",
            description=f"Available {domain_name} commands",
            metavar="<command>",
        )

        for cmd_name, cmd_info in sorted(domain_commands.items()):
            _add_command(cmd_subparsers, cmd_name, cmd_info)

        for group_name, group_info in sorted(domain_groups.items()):
            group_parser = cmd_subparsers.add_parser(
                group_name.replace("_", "-"),
                help=group_info.get("summary") or f"{group_name} commands",
            )
            group_subparsers = group_parser.add_subparsers(
                dest="subcommand",
                title="subcommands",
                description=f"Available {domain_name} {group_name} subcommands",
                metavar="<subcommand>",
            )
            for subcmd_name, subcmd_info in sorted(group_info["commands"].items()):
                _add_command(group_subparsers, subcmd_name, subcmd_info)

    return parser


def _get_version() -> str:
    from rules_kit import __version__

    return __version__


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the rules-kit CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 success, 1 failure, 130 interrupted)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    # If no domain specified, show help
    if not args.domain:
        parser.print_help()
        return 0

    func = getattr(args, "_func", None)
    if func is None:
        # Domain (or group) without a command: show the domain help
        domain_parser = parser._subparsers._group_actions[0].choices.get(args.domain)
        if domain_parser:
            domain_parser.print_help()
        return 0

    try:
        result = func(args)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    return int(result or 0)


if __name__ == "__main__":
    sys.exit(main())

"""Shared CLI utilities."""
from __future__ import annotations

import argparse
from typing import Optional

from rules_kit.core.composition.engine import RulesKitEngine
from rules_kit.core.composition.types import RunContext
from rules_kit.core.config.settings import EngineSettings, resolve_templates_dir
from rules_kit.core.exceptions import TemplateLibraryError
from rules_kit.core.stdlib_logging import configure_stdlib_logging, level_for_flags

from ._args import workspace_from_args


def configure_logging(args: argparse.Namespace) -> None:
    configure_stdlib_logging(
        level=level_for_flags(
            verbose=bool(getattr(args, "verbose", False)),
            debug=bool(getattr(args, "debug", False)),
        ),
        log_path=getattr(args, "log_file", None),
    )


def build_engine(
    args: argparse.Namespace,
    *,
    settings: Optional[EngineSettings] = None,
) -> RulesKitEngine:
    """Create an engine for the template library selected by ``args``.

    Raises:
        TemplateLibraryError: If the template library root does not exist.
    """
    templates_dir = resolve_templates_dir(getattr(args, "templates_dir", None))
    if not templates_dir.is_dir():
        raise TemplateLibraryError(
            f"Template library not found: {templates_dir}",
            context={"templates_dir": str(templates_dir)},
        )
    return RulesKitEngine(templates_dir, settings=settings)


def run_context_from_args(args: argparse.Namespace) -> RunContext:
    return RunContext(
        stack=args.stack,
        detected_version=args.detected_version,
        version_range=args.version_range,
        architecture=args.architecture,
        state_management=args.state_management,
        include_testing=bool(args.testing),
        include_signals=bool(args.signals),
        include_global=bool(args.include_global),
        mcp_tools=tuple(dict.fromkeys(args.mcp_tools or [])),
        project_path=args.project_path,
        cursor_path=args.cursor_path,
        workspace=workspace_from_args(args),
        debug=bool(getattr(args, "debug", False)),
    )


__all__ = ["build_engine", "configure_logging", "run_context_from_args"]

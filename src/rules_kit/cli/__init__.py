"""
rules-kit CLI package.

Provides the command-line interface with auto-discovery of commands
from subfolders (rules/, stacks/, config/).

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _progress: stderr progress counter
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter
from ._args import (
    add_force_flag,
    add_json_flag,
    add_selection_args,
    add_templates_dir_flag,
    add_verbosity_flags,
    workspace_from_args,
)
from ._progress import ProgressCounter
from ._utils import build_engine, configure_logging, run_context_from_args

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_force_flag",
    "add_json_flag",
    "add_selection_args",
    "add_templates_dir_flag",
    "add_verbosity_flags",
    "workspace_from_args",
    # Progress
    "ProgressCounter",
    # Utilities
    "build_engine",
    "configure_logging",
    "run_context_from_args",
]

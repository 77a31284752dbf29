"""
Agent Rules Kit data resource helpers.

Provides access to the bundled template library (templates/) using
importlib.resources.
"""

from __future__ import annotations

from importlib import resources
from pathlib import Path


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """
    Get absolute path to a data file or directory.

    Args:
        subpackage: Name of the data subdirectory (e.g., "templates")
        filename: Optional filename within the subdirectory

    Example:
        >>> get_data_path("templates", "kit-config.yaml")
        PosixPath('/path/to/rules_kit/data/templates/kit-config.yaml')
    """
    pkg = resources.files("rules_kit.data")
    base = Path(str(pkg / subpackage))
    return base / filename if filename else base


__all__ = ["get_data_path"]

"""File I/O helpers."""
from .core import (
    PathLike,
    atomic_write,
    ensure_directory,
    ensure_parent_dir,
    read_text,
)
from .yaml import read_yaml, write_yaml

__all__ = [
    "PathLike",
    "atomic_write",
    "ensure_directory",
    "ensure_parent_dir",
    "read_text",
    "read_yaml",
    "write_yaml",
]

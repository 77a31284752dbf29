"""File writer for generated rule documents.

Provides consistent file writing with:
- Directory creation
- Encoding handling
- Atomic replacement of existing rules
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from rules_kit.core.exceptions import OutputRootError
from rules_kit.core.utils.io import atomic_write, ensure_directory

if TYPE_CHECKING:
    from rules_kit.core.composition.types import OutputDocument

logger = logging.getLogger(__name__)


class RuleFileWriter:
    """Writes rendered rule documents below an optional base directory."""

    def __init__(self, base_dir: Optional[Path] = None, encoding: str = "utf-8") -> None:
        """Initialize the writer.

        Args:
            base_dir: Base directory for relative paths (optional).
            encoding: File encoding (default: utf-8).
        """
        self.base_dir = base_dir
        self.encoding = encoding

    def _resolve_path(self, path: Union[str, Path]) -> Path:
        """Resolve path, making absolute if base_dir is set."""
        path = Path(path)
        if not path.is_absolute() and self.base_dir:
            return self.base_dir / path
        return path

    def ensure_root(self, root: Union[str, Path]) -> Path:
        """Create the output root, raising OutputRootError when impossible."""
        resolved = self._resolve_path(root)
        try:
            return ensure_directory(resolved, create=True)
        except OSError as exc:
            raise OutputRootError(
                f"Cannot create rules output directory {resolved}: {exc}",
                context={"path": str(resolved)},
            ) from exc

    def write_text(self, path: Union[str, Path], content: str) -> Path:
        """Atomically write text content; parent directories are created."""
        resolved = self._resolve_path(path)
        atomic_write(resolved, lambda f: f.write(content), encoding=self.encoding)
        return resolved

    def write_document(self, document: "OutputDocument") -> Path:
        written = self.write_text(document.path, document.render())
        logger.debug("Wrote %s", written)
        return written


__all__ = ["RuleFileWriter"]

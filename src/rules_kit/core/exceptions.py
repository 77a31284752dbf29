from __future__ import annotations

from typing import Any, Dict, Mapping


class RulesKitError(Exception):
    """Base exception for Agent Rules Kit."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigurationError(RulesKitError, ValueError):
    """Raised when a kit configuration value cannot be used as requested."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        RulesKitError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class TemplateLibraryError(RulesKitError, FileNotFoundError):
    """Raised when the template library root does not exist."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        RulesKitError.__init__(self, message, context=context)
        FileNotFoundError.__init__(self, message)


class OutputRootError(RulesKitError, OSError):
    """Raised when the rules output root cannot be created.

    This is the only failure that halts a generation run; per-file
    failures are reported as outcomes instead.
    """

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        RulesKitError.__init__(self, message, context=context)
        OSError.__init__(self, message)


__all__ = [
    "RulesKitError",
    "ConfigurationError",
    "TemplateLibraryError",
    "OutputRootError",
]

"""Outcome types shared by the configuration store, cache and scheduler.

Reads and writes report what happened instead of collapsing every failure
to ``None``: an absent file, a malformed document and an I/O error are
different statuses so callers (and tests) can tell them apart.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class ReadStatus(str, Enum):
    OK = "ok"
    ABSENT = "absent"
    MALFORMED = "malformed"
    IO_ERROR = "io_error"


@dataclass(frozen=True)
class ReadResult(Generic[T]):
    """Result of reading one resource.

    Attributes:
        value: Parsed/raw value when ``status`` is OK, else None
        status: What happened
        path: The resource that was read
        error: Human-readable reason for non-OK statuses
    """

    value: Optional[T]
    status: ReadStatus
    path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is ReadStatus.OK

    @classmethod
    def success(cls, value: T, path: Optional[Path] = None) -> "ReadResult[T]":
        return cls(value=value, status=ReadStatus.OK, path=path)

    @classmethod
    def absent(cls, path: Optional[Path] = None) -> "ReadResult[T]":
        return cls(value=None, status=ReadStatus.ABSENT, path=path, error="not found")

    @classmethod
    def failure(
        cls, status: ReadStatus, error: str, path: Optional[Path] = None
    ) -> "ReadResult[T]":
        return cls(value=None, status=status, path=path, error=error)


class WriteStatus(str, Enum):
    WRITTEN = "written"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class WriteOutcome:
    """What happened to one planned output document."""

    path: Path
    status: WriteStatus
    error: Optional[str] = None


@dataclass
class PersistReport:
    """Aggregate of all write outcomes for a run."""

    outcomes: List[WriteOutcome] = field(default_factory=list)

    def _paths(self, status: WriteStatus) -> List[Path]:
        return [o.path for o in self.outcomes if o.status is status]

    @property
    def written(self) -> List[Path]:
        return self._paths(WriteStatus.WRITTEN)

    @property
    def skipped(self) -> List[Path]:
        return self._paths(WriteStatus.SKIPPED)

    @property
    def failed(self) -> List[Path]:
        return self._paths(WriteStatus.FAILED)

    @property
    def success(self) -> bool:
        return not self.failed

    def to_dict(self) -> dict:
        return {
            "written": [str(p) for p in self.written],
            "skipped": [str(p) for p in self.skipped],
            "failed": [
                {"path": str(o.path), "error": o.error}
                for o in self.outcomes
                if o.status is WriteStatus.FAILED
            ],
        }


__all__ = [
    "ReadStatus",
    "ReadResult",
    "WriteStatus",
    "WriteOutcome",
    "PersistReport",
]

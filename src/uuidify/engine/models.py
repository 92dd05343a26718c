"""Batch data models for the rename engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, List, Literal

from pydantic import BaseModel, ConfigDict, Field

NO_FILES_MESSAGE = "No files were detected"


class BatchState(str, Enum):
    """Lifecycle of a single rename batch."""

    IDLE = "idle"
    RESOLVING = "resolving"
    EXPANDING = "expanding"
    RENAMING = "renaming"
    DONE = "done"


class RenamePlan(BaseModel):
    """Pairs a leaf file with its generated name in the same directory.

    Attributes:
        source: Original file path.
        destination: Generated target path.
    """

    model_config = ConfigDict(frozen=True)

    source: Path
    destination: Path

    @property
    def source_name(self) -> str:
        return self.source.name

    @property
    def destination_name(self) -> str:
        return self.destination.name


@dataclass(frozen=True, slots=True)
class ProgressEvent:
    """Progress emitted after each rename attempt.

    Attributes:
        completed: Items attempted so far, including this one.
        total: Items in the batch.
        current_name: Original base name of the item just attempted.
        succeeded: Whether the attempt renamed the item.
    """

    completed: int
    total: int
    current_name: str
    succeeded: bool = True

    @property
    def fraction(self) -> float:
        return self.completed / self.total if self.total else 1.0


class BatchResult(BaseModel):
    """Final report for one batch.

    Attributes:
        outcome: ``"completed"`` when items were attempted, ``"empty"`` when
            nothing was detected.
        message: Human-readable status line.
        succeeded: Original base names that were renamed, in order.
        failed: Original base names whose rename failed, in order.
        renamed: Executed (or, for dry runs, planned) rename pairs.
        errors: Failure details as ``"<path>: <error>"`` strings.
        skipped: Entries excluded during expansion.
        dry_run: Whether renames were only planned.
    """

    model_config = ConfigDict(frozen=True)

    outcome: Literal["completed", "empty"]
    message: str
    succeeded: List[str] = Field(default_factory=list)
    failed: List[str] = Field(default_factory=list)
    renamed: List[RenamePlan] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    skipped: List[Path] = Field(default_factory=list)
    dry_run: bool = False

    @classmethod
    def empty(cls, *, skipped: List[Path] | None = None, dry_run: bool = False) -> "BatchResult":
        """Return the result reported when no files were detected."""
        return cls(
            outcome="empty",
            message=NO_FILES_MESSAGE,
            skipped=list(skipped or []),
            dry_run=dry_run,
        )

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-ready representation of the batch."""
        return {
            "outcome": self.outcome,
            "message": self.message,
            "dry_run": self.dry_run,
            "counts": {
                "total": self.total,
                "renamed": len(self.succeeded),
                "failed": len(self.failed),
                "skipped": len(self.skipped),
            },
            "renamed": [
                {"source": plan.source.as_posix(), "destination": plan.destination.as_posix()}
                for plan in self.renamed
            ],
            "failed": list(self.failed),
            "errors": list(self.errors),
            "skipped": [path.as_posix() for path in self.skipped],
        }


def summarize(renamed: int, failed: int, *, dry_run: bool = False) -> str:
    """Compose the status line shown after a batch."""
    verb = "Would rename" if dry_run else "Renamed"
    if failed:
        return f"{verb} {renamed} file(s), {failed} failed"
    return f"{verb} {renamed} file(s)"


__all__ = [
    "BatchResult",
    "BatchState",
    "NO_FILES_MESSAGE",
    "ProgressEvent",
    "RenamePlan",
    "summarize",
]

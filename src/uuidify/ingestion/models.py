"""Data models produced by input resolution and tree expansion."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from uuidify.naming.generator import extension_of


def standardize(path: Path | str) -> Path:
    """Return the absolute, normalized form of ``path`` used for deduplication.

    Symlinks are not resolved; only ``.``/``..`` segments and redundant
    separators are collapsed.
    """
    return Path(os.path.normpath(os.path.abspath(os.fspath(path))))


class LeafFile(BaseModel):
    """A non-directory entry scheduled for renaming.

    Attributes:
        path: Standardized absolute path of the entry.
        parent: Directory that will receive the new name.
        name: Original base name.
        extension: Extension without its dot; empty when the name has none.
    """

    model_config = ConfigDict(frozen=True)

    path: Path
    parent: Path
    name: str
    extension: str = ""

    @classmethod
    def from_path(cls, path: Path | str) -> "LeafFile":
        """Build a leaf from any path, standardizing it first."""
        standardized = standardize(path)
        return cls(
            path=standardized,
            parent=standardized.parent,
            name=standardized.name,
            extension=extension_of(standardized.name),
        )


class ExpansionResult(BaseModel):
    """Outcome of expanding dropped roots into leaf files.

    Attributes:
        leaves: Leaf files in first-seen order, without duplicates.
        skipped: Entries excluded because their metadata could not be read.
    """

    leaves: List[LeafFile] = Field(default_factory=list)
    skipped: List[Path] = Field(default_factory=list)


__all__ = ["ExpansionResult", "LeafFile", "standardize"]

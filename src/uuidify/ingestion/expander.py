"""Expand dropped files and directories into the leaf files to rename."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Iterable, Iterator

from .models import ExpansionResult, LeafFile, standardize

LOGGER = logging.getLogger(__name__)


def _is_hidden(name: str) -> bool:
    return name.startswith(".") and name not in (".", "..")


class TreeExpander:
    """Flatten a mix of file and directory roots into unique leaf files.

    Directories themselves are never emitted, so the tree structure survives
    the rename. Entries whose metadata cannot be read are skipped rather than
    failing the batch. Each directory is walked at most once, so followed
    symlink cycles terminate.
    """

    def __init__(self, *, include_hidden: bool = True, follow_symlinks: bool = False) -> None:
        self.include_hidden = include_hidden
        self.follow_symlinks = follow_symlinks

    def expand(self, roots: Iterable[Path | str]) -> ExpansionResult:
        """Return leaf files for ``roots`` in first-seen order.

        Args:
            roots: Dropped paths; files and directories may be mixed and may
                overlap.

        Returns:
            ExpansionResult: Deduplicated leaves plus the skipped entries.
        """
        result = ExpansionResult()
        seen: set[Path] = set()

        for root in roots:
            # Roots are literal paths; "~" expansion belongs to the shell.
            root_path = Path(root)
            try:
                is_directory = stat.S_ISDIR(root_path.stat().st_mode)
            except (OSError, ValueError) as exc:
                self._skip(result, root_path, exc)
                continue

            if not is_directory:
                self._append(result, seen, root_path)
                continue

            for path in self._walk(root_path, result):
                self._append(result, seen, path)

        return result

    def _walk(self, root: Path, result: ExpansionResult) -> Iterator[Path]:
        def _on_error(exc: OSError) -> None:
            self._skip(result, Path(exc.filename or root), exc)

        visited: set[tuple[int, int]] = set()
        for dirpath, dirnames, filenames in os.walk(
            root, onerror=_on_error, followlinks=self.follow_symlinks
        ):
            try:
                info = os.stat(dirpath)
            except OSError as exc:
                self._skip(result, Path(dirpath), exc)
                dirnames[:] = []
                continue
            # A followed link back into the tree reaches a directory twice.
            identity = (info.st_dev, info.st_ino)
            if identity in visited:
                LOGGER.debug("Not revisiting %s", dirpath)
                dirnames[:] = []
                continue
            visited.add(identity)

            dirnames.sort()
            if not self.include_hidden:
                dirnames[:] = [name for name in dirnames if not _is_hidden(name)]

            current = Path(dirpath)
            for name in sorted(filenames):
                if not self.include_hidden and _is_hidden(name):
                    continue
                path = current / name
                try:
                    # Follows symlinks; dangling links raise and are skipped.
                    mode = path.stat().st_mode
                except (OSError, ValueError) as exc:
                    self._skip(result, path, exc)
                    continue
                if stat.S_ISDIR(mode):
                    continue
                yield path

    def _append(self, result: ExpansionResult, seen: set[Path], path: Path) -> None:
        key = standardize(path)
        if key in seen:
            return
        seen.add(key)
        result.leaves.append(LeafFile.from_path(key))

    def _skip(self, result: ExpansionResult, path: Path, exc: Exception) -> None:
        LOGGER.debug("Skipping %s: %s", path, exc)
        result.skipped.append(path)


__all__ = ["TreeExpander"]

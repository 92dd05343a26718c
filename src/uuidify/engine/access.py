"""Best-effort access bracketing around dropped roots."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Protocol

from uuidify.ingestion.models import standardize

LOGGER = logging.getLogger(__name__)


class AccessProvider(Protocol):
    """Grants elevated access to a path for the duration of a batch."""

    def acquire(self, path: Path) -> bool:
        """Try to obtain access; return whether it was granted."""
        ...

    def release(self, path: Path) -> None:
        """Give back access obtained through :meth:`acquire`."""
        ...


class NullAccessProvider:
    """Provider for platforms without sandboxed file access."""

    def acquire(self, path: Path) -> bool:
        return False

    def release(self, path: Path) -> None:
        return None


@contextmanager
def scoped_access(provider: AccessProvider, roots: Iterable[Path]) -> Iterator[list[Path]]:
    """Hold access to every distinct root for the body of the ``with`` block.

    Roots that cannot be acquired are used with default access. Acquired roots
    are released in reverse order on exit, including when the body raises.

    Yields:
        list[Path]: Roots for which access was granted.
    """
    acquired: list[Path] = []
    seen: set[Path] = set()
    for root in roots:
        key = standardize(root)
        if key in seen:
            continue
        seen.add(key)
        try:
            granted = provider.acquire(root)
        except Exception as exc:  # any provider failure falls back to default access
            LOGGER.info("Access to %s not granted (%s); continuing with default access.", root, exc)
            continue
        if granted:
            acquired.append(root)

    try:
        yield list(acquired)
    finally:
        for root in reversed(acquired):
            try:
                provider.release(root)
            except OSError as exc:
                LOGGER.warning("Failed to release access to %s: %s", root, exc)


__all__ = ["AccessProvider", "NullAccessProvider", "scoped_access"]

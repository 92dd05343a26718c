"""Resolve dropped item handles into filesystem paths.

A drop surface hands over opaque handles whose payload has to be loaded
asynchronously. Payloads arrive either as raw path bytes, as text, or as a
``file://`` URL; :func:`payload_to_path` collapses all of them into a single
:class:`~pathlib.Path`. :class:`InputResolver` loads every handle in its own
task and joins them before anything is renamed.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Protocol, runtime_checkable
from urllib.parse import urlparse
from urllib.request import url2pathname

from .models import standardize

LOGGER = logging.getLogger(__name__)


@runtime_checkable
class DropHandle(Protocol):
    """Opaque item supplied by a drop surface."""

    def has_file_reference(self) -> bool:
        """Return whether the item advertises a file reference payload."""
        ...

    async def load_file_reference(self) -> Any:
        """Load the file reference payload."""
        ...


def payload_to_path(payload: Any) -> Optional[Path]:
    """Convert a loaded file-reference payload into a path.

    Args:
        payload: Raw path bytes, a path string, a ``file://`` URL (text or
            bytes), or any ``os.PathLike``.

    Returns:
        Optional[Path]: The referenced path, or ``None`` when the payload does
        not describe a local file.
    """
    if isinstance(payload, (bytes, bytearray)):
        text = os.fsdecode(bytes(payload))
    elif isinstance(payload, str):
        text = payload
    elif isinstance(payload, os.PathLike):
        raw = os.fspath(payload)
        text = os.fsdecode(raw) if isinstance(raw, bytes) else raw
    else:
        return None

    text = text.rstrip("\x00")
    if not text:
        return None

    if text.lower().startswith("file:"):
        parsed = urlparse(text)
        if parsed.netloc not in ("", "localhost"):
            return None
        text = url2pathname(parsed.path)
        if not text:
            return None
    elif "://" in text:
        return None

    # An embedded NUL never names a real file.
    if "\x00" in text:
        return None
    return Path(text)


class PathDropHandle:
    """Handle whose payload is already available, e.g. a command-line argument."""

    def __init__(self, payload: Any) -> None:
        self._payload = payload

    def has_file_reference(self) -> bool:
        return isinstance(self._payload, (str, bytes, bytearray, os.PathLike))

    async def load_file_reference(self) -> Any:
        return self._payload

    def __repr__(self) -> str:
        return f"PathDropHandle({self._payload!r})"


class CallableDropHandle:
    """Handle backed by a blocking loader, run on a worker thread.

    Args:
        loader: Callable returning the payload; may block or raise.
        file_reference: Whether the item advertises a file reference at all.
    """

    def __init__(self, loader: Callable[[], Any], *, file_reference: bool = True) -> None:
        self._loader = loader
        self._file_reference = file_reference

    def has_file_reference(self) -> bool:
        return self._file_reference

    async def load_file_reference(self) -> Any:
        return await asyncio.to_thread(self._loader)


class InputResolver:
    """Concurrently resolve drop handles, dropping the ones that fail."""

    async def resolve(self, handles: Iterable[Any]) -> list[Path]:
        """Resolve each handle in its own task and join the results.

        Handles that do not advertise a file reference, raise while loading, or
        yield an unusable payload are left out; none of these fail the call.

        Args:
            handles: Items supplied by the drop surface.

        Returns:
            list[Path]: Unique resolved paths. An empty list means nothing
            usable was dropped.
        """
        candidates = [handle for handle in handles if self._advertises(handle)]
        if not candidates:
            return []

        resolved = await asyncio.gather(*(self._resolve_one(handle) for handle in candidates))

        paths: list[Path] = []
        seen: set[Path] = set()
        for path in resolved:
            if path is None:
                continue
            key = standardize(path)
            if key in seen:
                continue
            seen.add(key)
            paths.append(path)
        return paths

    async def _resolve_one(self, handle: DropHandle) -> Optional[Path]:
        try:
            payload = await handle.load_file_reference()
        except Exception as exc:  # provider failures only drop this handle
            LOGGER.debug("Could not load drop handle %r: %s", handle, exc)
            return None

        path = payload_to_path(payload)
        if path is None:
            LOGGER.debug("Drop handle %r yielded no usable path", handle)
        return path

    def _advertises(self, handle: Any) -> bool:
        check = getattr(handle, "has_file_reference", None)
        if not callable(check) or not callable(getattr(handle, "load_file_reference", None)):
            return False
        try:
            return bool(check())
        except Exception as exc:  # a broken handle is treated as not conforming
            LOGGER.debug("Drop handle %r failed capability check: %s", handle, exc)
            return False


__all__ = [
    "CallableDropHandle",
    "DropHandle",
    "InputResolver",
    "PathDropHandle",
    "payload_to_path",
]

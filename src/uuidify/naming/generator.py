"""Random identifier names that keep the original extension."""

from __future__ import annotations

import os
import uuid
from typing import Callable, Optional


def extension_of(name: str) -> str:
    """Return the extension of ``name`` without its leading dot.

    Only the final suffix counts (``"a.tar.gz"`` gives ``"gz"``). Dot-files such
    as ``".bashrc"`` and names ending in a bare dot have no extension.
    """
    return os.path.splitext(name)[1][1:]


class NameGenerator:
    """Produce fresh ``<uuid>[.<ext>]`` file names.

    Args:
        token_factory: Optional callable returning identifier strings, used to
            make generation deterministic in tests.
        uppercase: Render the default UUID4 tokens in uppercase.
    """

    def __init__(
        self,
        token_factory: Optional[Callable[[], str]] = None,
        *,
        uppercase: bool = True,
    ) -> None:
        self._token_factory = token_factory
        self._uppercase = uppercase

    def token(self) -> str:
        """Return a new identifier token."""
        if self._token_factory is not None:
            return self._token_factory()
        value = str(uuid.uuid4())
        return value.upper() if self._uppercase else value

    def generate(self, extension: str) -> str:
        """Return a new file name carrying ``extension``.

        Args:
            extension: Extension to preserve, with or without a leading dot.

        Returns:
            str: ``"<token>.<extension>"``, or just ``"<token>"`` when the
            extension is empty.
        """
        return self.compose(self.token(), extension)

    @staticmethod
    def compose(token: str, extension: str) -> str:
        """Join a token and an extension into a file name."""
        extension = extension.lstrip(".")
        return f"{token}.{extension}" if extension else token


__all__ = ["NameGenerator", "extension_of"]

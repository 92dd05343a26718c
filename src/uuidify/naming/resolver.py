"""Collision checks for generated names."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Collection

from .generator import NameGenerator

LOGGER = logging.getLogger(__name__)


class CollisionResolver:
    """Find a generated name that is free inside a directory.

    Random draws are retried up to ``max_attempts`` times. After that the last
    token is reused with a numeric disambiguator, which always terminates even
    when the generator keeps returning the same value.
    """

    def __init__(self, generator: NameGenerator | None = None, *, max_attempts: int = 16) -> None:
        self.generator = generator or NameGenerator()
        self.max_attempts = max(1, max_attempts)

    def resolve(
        self,
        directory: Path,
        extension: str,
        *,
        reserved: Collection[Path] = (),
    ) -> Path:
        """Return a path in ``directory`` that does not exist yet.

        Args:
            directory: Parent directory for the new name.
            extension: Extension to keep on the generated name.
            reserved: Paths already promised to other items in the same batch.

        Returns:
            Path: Candidate path that was free at check time.
        """
        token = ""
        for _ in range(self.max_attempts):
            token = self.generator.token()
            candidate = directory / NameGenerator.compose(token, extension)
            if not self._occupied(candidate, reserved):
                return candidate

        LOGGER.warning(
            "Generated names kept colliding in %s after %d attempts; appending a counter.",
            directory,
            self.max_attempts,
        )
        counter = 1
        while True:
            candidate = directory / NameGenerator.compose(f"{token}-{counter}", extension)
            if not self._occupied(candidate, reserved):
                return candidate
            counter += 1

    def _occupied(self, candidate: Path, reserved: Collection[Path]) -> bool:
        # lexists: a dangling symlink still occupies the name.
        return candidate in reserved or os.path.lexists(candidate)


__all__ = ["CollisionResolver"]

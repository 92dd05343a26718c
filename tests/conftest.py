"""Shared pytest fixtures."""

from __future__ import annotations

import logging
from typing import Iterator

import pytest


@pytest.fixture(autouse=True)
def _reset_uuidify_logging() -> Iterator[None]:
    """Drop handlers installed by `configure_logging` so tests stay isolated."""
    yield
    logger = logging.getLogger("uuidify")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)

"""Rename engine package."""

from .access import AccessProvider, NullAccessProvider, scoped_access
from .errors import BUSY_MESSAGE, BusyError, RenameEngineError
from .models import NO_FILES_MESSAGE, BatchResult, BatchState, ProgressEvent, RenamePlan
from .service import IDLE_MESSAGE, RenameEngine

__all__ = [
    "AccessProvider",
    "BUSY_MESSAGE",
    "BatchResult",
    "BatchState",
    "BusyError",
    "IDLE_MESSAGE",
    "NO_FILES_MESSAGE",
    "NullAccessProvider",
    "ProgressEvent",
    "RenameEngine",
    "RenameEngineError",
    "RenamePlan",
    "scoped_access",
]

"""Rename engine errors."""

BUSY_MESSAGE = "Rename already in progress"


class RenameEngineError(Exception):
    """Base exception for rename engine operations."""


class BusyError(RenameEngineError):
    """Raised when a batch is requested while another one is still running."""

    def __init__(self, message: str = BUSY_MESSAGE) -> None:
        super().__init__(message)

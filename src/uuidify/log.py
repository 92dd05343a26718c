"""Logging setup shared by the CLI and embedding applications."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from uuidify.config.models import LoggingSettings

_HANDLER_FLAG = "_uuidify_handler"


def configure_logging(
    settings: LoggingSettings,
    *,
    console: Console | None = None,
) -> logging.Logger:
    """Attach uuidify handlers to the package logger.

    Calling this repeatedly replaces previously installed handlers instead of
    stacking duplicates.

    Args:
        settings: Logging section of the loaded configuration.
        console: Optional rich console; defaults to stderr.

    Returns:
        logging.Logger: The configured ``uuidify`` package logger.
    """
    logger = logging.getLogger("uuidify")
    level = logging.getLevelName(settings.level.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_FLAG, False):
            logger.removeHandler(handler)
            handler.close()

    stream_handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    setattr(stream_handler, _HANDLER_FLAG, True)
    logger.addHandler(stream_handler)

    if settings.file:
        log_path = Path(settings.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max(1, settings.max_size_mb) * 1024 * 1024,
            backupCount=max(0, settings.backup_count),
            encoding="utf-8",
        )
        file_handler.setFormatter(
            logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s")
        )
        setattr(file_handler, _HANDLER_FLAG, True)
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging"]

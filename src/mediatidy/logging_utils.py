"""Logging setup for the mediatidy CLI."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from mediatidy.config.models import LoggingSettings

PACKAGE_LOGGER = "mediatidy"
_FILE_FORMAT = "%(asctime)s %(levelname)-8s [%(threadName)s] %(name)s: %(message)s"


def configure_logging(
    settings: LoggingSettings,
    *,
    console: Console | None = None,
) -> logging.Logger:
    """Attach console (and optional rotating file) handlers to the package logger.

    Handlers installed by an earlier call are replaced, so repeated CLI
    invocations in one process do not duplicate output.

    Args:
        settings: Logging section of the loaded configuration.
        console: Rich console to render to; defaults to stderr.

    Returns:
        logging.Logger: The configured ``mediatidy`` logger.

    Raises:
        OSError: If the log file cannot be opened.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in [h for h in logger.handlers if getattr(h, "_mediatidy", False)]:
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(settings.level)

    console_handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler._mediatidy = True  # type: ignore[attr-defined]
    logger.addHandler(console_handler)

    if settings.file:
        log_path = Path(settings.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=settings.max_size_mb * 1024 * 1024,
            backupCount=settings.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        file_handler._mediatidy = True  # type: ignore[attr-defined]
        logger.addHandler(file_handler)

    return logger


__all__ = ["PACKAGE_LOGGER", "configure_logging"]

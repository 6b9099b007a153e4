"""
Logging configuration.

Every module gets its logger with logging.getLogger(__name__), so they all
hang off the "day_planner" logger. configure_logging() attaches one Rich
handler there; nothing else in the package touches handlers.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "day_planner"


def configure_logging(level: str | int = "WARNING", console: Console | None = None) -> logging.Logger:
    """
    Send package log records to stderr through Rich.

    Safe to call more than once: the previous Rich handler is replaced.

    Args:
        level: A level name ("DEBUG") or number
        console: Console to render into (defaults to a stderr console)
    """
    logger = logging.getLogger(PACKAGE_LOGGER)

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    logger.addHandler(handler)
    logger.setLevel(level)
    return logger

"""Logging configuration for the ``samplefetch`` command.

Library modules only ever call ``logging.getLogger(__name__)``; this
module is the single place that attaches a handler.  Records are
rendered by :class:`rich.logging.RichHandler` on the stderr console.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "samplefetch"

_VERBOSITY_LEVELS: dict[int, int] = {
    0: logging.WARNING,
    1: logging.INFO,
}


def level_for_verbosity(verbosity: int) -> int:
    """Map the ``-v`` count to a logging level (``-vv`` and up is DEBUG)."""
    return _VERBOSITY_LEVELS.get(max(verbosity, 0), logging.DEBUG)


def configure_logging(verbosity: int, console: Console) -> logging.Logger:
    """Install a Rich handler on the package logger and return it.

    Calling this again replaces the previously installed handler instead
    of stacking a second one.  At DEBUG level httpx's own request logs
    are routed through the same handler.
    """
    level = level_for_verbosity(verbosity)
    handler = RichHandler(
        console=console,
        level=level,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.set_name(LOGGER_NAME)

    logger = logging.getLogger(LOGGER_NAME)
    _replace_handler(logger, handler)
    logger.setLevel(level)
    logger.propagate = False

    httpx_logger = logging.getLogger("httpx")
    if level <= logging.DEBUG:
        _replace_handler(httpx_logger, handler)
        httpx_logger.setLevel(logging.DEBUG)
        httpx_logger.propagate = False
    else:
        _remove_handler(httpx_logger)
        httpx_logger.propagate = True

    return logger


def _replace_handler(logger: logging.Logger, handler: logging.Handler) -> None:
    _remove_handler(logger)
    logger.addHandler(handler)


def _remove_handler(logger: logging.Logger) -> None:
    for existing in list(logger.handlers):
        if existing.get_name() == LOGGER_NAME:
            logger.removeHandler(existing)

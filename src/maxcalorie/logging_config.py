"""Logging setup for command-line use."""

from __future__ import annotations

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "maxcalorie"


def configure_logging(
    level: Union[int, str] = logging.WARNING,
    console: Optional[Console] = None,
) -> logging.Logger:
    """Send maxcalorie log records to stderr through Rich.

    Library modules only create loggers; handlers are installed here, once
    per process. Calling again replaces the previous handler and level.

    Args:
        level: Logging level name or number
        console: Console to write to. Defaults to a stderr console.

    Returns:
        The package logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown logging level: {level}")

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger

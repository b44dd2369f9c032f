"""Logging configuration for taskmaster."""

import logging
from typing import Union

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "taskmaster"


def setup_logging(level: Union[int, str] = logging.WARNING) -> logging.Logger:
    """Attach a Rich handler writing to stderr to the taskmaster logger.

    Existing handlers are removed first so calling this more than once
    (e.g. once per CLI invocation in tests) does not duplicate output.

    Args:
        level: Log level name or number

    Returns:
        The configured package logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=level <= logging.DEBUG,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    logger.addHandler(handler)

    return logger

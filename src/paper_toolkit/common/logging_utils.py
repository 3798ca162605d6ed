"""
Logging setup for command line use.

Library modules only create module-level loggers; handlers are attached
here by the application entry point.
"""
from __future__ import annotations

import logging
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: int | str = logging.INFO, stream: Optional[TextIO] = None) -> logging.Handler:
    """
    Attach a console handler to the package logger.

    Args:
        level: Logging level (name or number)
        stream: Output stream (default stderr)

    Returns:
        The attached handler (for later removal).
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger("paper_toolkit")
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler


def remove_handler(handler: logging.Handler) -> None:
    logging.getLogger("paper_toolkit").removeHandler(handler)

"""Logging setup for dotboot.

All progress output goes to stderr so stdout stays free for the
invoked booster process. Each level is rendered with a short marker:

    ==> info
    ✓   success
    !   warning
    ✗   error
"""

from __future__ import annotations

import logging
import sys
from typing import Dict, Optional, TextIO

ROOT_LOGGER_NAME = "dotboot"

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[0;33m"
BLUE = "\033[0;34m"
RESET = "\033[0m"

_MARKERS: Dict[int, str] = {
    logging.DEBUG: "   ",
    logging.INFO: "==>",
    SUCCESS: "✓",
    logging.WARNING: "!",
    logging.ERROR: "✗",
    logging.CRITICAL: "✗",
}

_COLORS: Dict[int, str] = {
    logging.INFO: BLUE,
    SUCCESS: GREEN,
    logging.WARNING: YELLOW,
    logging.ERROR: RED,
    logging.CRITICAL: RED,
}


class MarkerFormatter(logging.Formatter):
    """Formats records as ``<marker> <message>``, optionally coloured."""

    def __init__(self, color: bool = True) -> None:
        super().__init__()
        self._color = color

    def format(self, record: logging.LogRecord) -> str:
        marker = _MARKERS.get(record.levelno, "")
        message = record.getMessage()
        # Continuation lines keep the marker so multi-line errors stay grouped
        lines = [f"{marker} {line}" for line in message.splitlines() or [""]]
        text = "\n".join(lines)
        if record.exc_info:
            text = f"{text}\n{self.formatException(record.exc_info)}"
        color = _COLORS.get(record.levelno)
        if self._color and color:
            return f"{color}{text}{RESET}"
        return text


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the dotboot namespace.

    Args:
        name: Module name, usually ``__name__``.

    Returns:
        Logger instance.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def log_success(logger: logging.Logger, message: str) -> None:
    """Log a message at the SUCCESS level."""
    logger.log(SUCCESS, message)


def configure_logging(
    debug: bool = False,
    quiet: bool = False,
    color: Optional[bool] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Configure the dotboot logger.

    Progress messages are shown by default. ``quiet`` limits output to
    errors and ``debug`` adds diagnostic detail.

    Args:
        debug: Enable debug logging.
        quiet: Only show errors.
        color: Force colour on or off. Defaults to colour when the
            stream is a terminal.
        stream: Output stream (defaults to stderr).
    """
    if stream is None:
        stream = sys.stderr

    if debug:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.INFO

    if color is None:
        color = hasattr(stream, "isatty") and stream.isatty()

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(MarkerFormatter(color=color))
    logger.addHandler(handler)
    logger.setLevel(level)

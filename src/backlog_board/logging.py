"""Logging setup for backlog-board.

The dashboard owns the terminal, so while it runs records go either to a
file or to Textual's devtools console, never to stderr.
"""

import logging
from pathlib import Path
from typing import Optional

from textual.logging import TextualHandler


LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}
DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

PACKAGE_LOGGER = "backlog_board"


def _resolve_level(name: str) -> int:
    return LEVELS.get(name.strip().upper(), logging.INFO)


def setup_logging(
    level: str = DEFAULT_LEVEL,
    log_file: Optional[Path] = None,
    to_textual: bool = False,
) -> logging.Logger:
    """Configure the package logger and return it.

    Args:
        level: Level name, case-insensitive; unknown names mean INFO.
        log_file: Append records to this file when given.
        to_textual: Send records to the Textual console instead of stderr.
            Ignored when ``log_file`` is set.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    handler: logging.Handler
    if log_file is not None:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    elif to_textual:
        handler = TextualHandler()
    else:
        handler = logging.StreamHandler()

    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(_resolve_level(level))
    logger.propagate = False
    return logger

"""Logging configuration for the GitLab file URL integration."""

import logging
import sys
from typing import TextIO


LOGGER_NAME = "gitlab_file_url"

# httpx logs every request at INFO, including project ID lookups
_CHATTY_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> logging.Logger:
    """Attach a single handler to the package logger.

    Calling it again keeps the existing handler but still applies ``level``.
    Unknown level names fall back to INFO. Unless the level is DEBUG, the HTTP client
    libraries only report warnings.

    Args:
        level: Logging level name.
        stream: Where records go. Defaults to stderr, as stdout carries the
            MCP stdio transport.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    if not logger.handlers:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(handler)

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING)

    return logger

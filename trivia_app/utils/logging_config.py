"""Logging configuration helpers for the trivia game."""

from __future__ import annotations

import logging
from logging import Logger
import os

LOG_LEVEL_ENV_VAR = "TRIVIA_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: int | str | None = None) -> Logger:
    """Configure basic logging for the application and return its logger.

    The level defaults to INFO and can be overridden with the
    ``TRIVIA_LOG_LEVEL`` environment variable (e.g. ``DEBUG``).
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO").upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    return logging.getLogger("trivia_app")

"""Logging configuration for command-line use."""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "cldf_wordlist"


def setup_logging(level: str = "INFO") -> None:
    """Send importer log records to stderr at *level*.

    Only the package logger is configured, so embedding applications keep
    control of the root logger.
    """
    numeric = getattr(logging, level.upper(), logging.INFO)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(numeric)
    logger.propagate = False

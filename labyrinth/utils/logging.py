"""Logging configuration for the server and the headless runner."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s [%(levelname)-5s] %(name)-25s | %(message)s"
LOG_DATEFMT = "%H:%M:%S"


def setup_logging(level: str | int = "INFO", stream: TextIO | None = None) -> None:
    """Install a single handler on the root logger.

    Unknown level names fall back to INFO. Calling this again replaces the
    previous handler rather than stacking a second one.
    """
    if isinstance(level, int):
        numeric_level = level
    else:
        numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

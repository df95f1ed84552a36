# Path: compare_studio/config/logging_setup.py
# Purpose: Configure standard library logging for the application.
# Layer: config.
# Details: Applies a single basicConfig format shared by all compare_studio loggers.

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s:%(name)s:%(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """Install the root handler once; later calls only adjust the level."""

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("compare_studio").setLevel(level)

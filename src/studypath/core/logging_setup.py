"""
Logging Setup

Configures stdlib logging for the application process.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once per process.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("studypath").setLevel(level)

    # SQL echo is controlled by settings.DEBUG, keep the engine logger quiet otherwise
    if level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

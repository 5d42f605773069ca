# kbpages/logging/config.py
"""Console logging setup for the kbpages package."""

import logging
from typing import Optional

from kbpages.core import config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

console_handler = logging.StreamHandler()
console_handler.setFormatter(logging.Formatter(LOG_FORMAT))


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach the console handler to the package logger. Safe to call repeatedly.

    The package logger does not propagate, so records are written once even
    when the root logger has its own handler (as under uvicorn).
    """
    logger = logging.getLogger("kbpages")
    logger.setLevel(level or config.LOG_LEVEL)
    logger.propagate = False

    if console_handler not in logger.handlers:
        logger.addHandler(console_handler)

    return logger

"""Package-wide logger writing to stderr."""
import logging
import os
import sys


LOGGER_NAME: str = "calculator_client"
LOG_FORMAT: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def _build_logger() -> logging.Logger:
    """
    Create the package logger once, with a single stderr handler.

    The level is read from the ``CALCULATOR_LOG_LEVEL`` environment variable (default ``INFO``).

    :return: Configured logger
    :rtype: logging.Logger
    """
    log = logging.getLogger(LOGGER_NAME)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
    log.setLevel(os.getenv("CALCULATOR_LOG_LEVEL", "INFO").upper())
    return log


logger: logging.Logger = _build_logger()

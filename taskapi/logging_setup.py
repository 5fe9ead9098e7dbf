"""Logging configuration for the application loggers."""

import logging
import sys

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | int = logging.INFO) -> None:
    """Send ``taskapi.*`` records to stderr at the given level.

    Only the package logger is touched, so server and test-runner handlers keep
    working. Safe to call more than once.
    """
    logger = logging.getLogger("taskapi")
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    if any(getattr(handler, "_taskapi", False) for handler in logger.handlers):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    handler._taskapi = True
    logger.addHandler(handler)

"""
Logging configuration for the directory.

Everything logs under the ``restaurant_directory`` namespace. The API
server logs to a file and the console; the render script logs to stderr
only, so stdout carries nothing but markup.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

PACKAGE_LOGGER = "restaurant_directory"

# Marks handlers installed by setup_logging so a second call replaces them
_HANDLER_FLAG = "_restaurant_directory_handler"

DETAILED_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"
CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"


def _tag(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_FLAG, True)
    return handler


def teardown_logging() -> None:
    """Remove and close the handlers installed by setup_logging."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in logger.handlers[:]:
        if getattr(handler, _HANDLER_FLAG, False):
            logger.removeHandler(handler)
            handler.close()


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = "logs/restaurant_directory.log",
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure the package logger and return it.

    Args:
        level: Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown names fall back to INFO.
        log_file: Path of the detailed log file, or None for console-only
            output.
        stream: Console stream. Defaults to stdout.

    Calling this again replaces the handlers from the previous call
    instead of stacking new ones on top.
    """
    teardown_logging()
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    console_handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(_tag(console_handler))

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(fmt=DETAILED_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(_tag(file_handler))

    # requests goes through urllib3
    for noisy_logger in ["urllib3", "httpx", "httpcore", "uvicorn.access"]:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    logger.debug("Logging configured: level=%s, file=%s", level, log_file or "-")
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger under the restaurant_directory namespace.

    Usage:
        from restaurant_directory.logging_config import get_logger
        logger = get_logger(__name__)
        logger.info("Loaded %d restaurants", count)
    """
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")

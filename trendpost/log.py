"""Run logging for trendpost.

The console carries the batch narrative at INFO: which topic each attempt
picked, why it was rejected, which file got written. A per-day file under
LOGS_DIR collects everything at DEBUG, including skipped source items, the
attempt table printed at the end of a run and HTTP retry delays.
"""

import logging
import sys
from datetime import date
from pathlib import Path

from .config import LOGS_DIR

LOGGER_NAME = "trendpost"
CONSOLE_FORMAT = "  %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-7s %(module)-11s %(message)s"

# Client libraries that log each request at DEBUG
CHATTY_LOGGERS = ("urllib3", "httpx", "httpcore", "anthropic")

_logger = None


def log_path(day: date | None = None) -> Path:
    """The file a run on `day` appends to."""
    day = day or date.today()
    return LOGS_DIR / f"trendpost_{day:%Y%m%d}.log"


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.set_name("console")
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _file_handler() -> logging.Handler | None:
    try:
        LOGS_DIR.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path(), encoding="utf-8")
    except OSError:
        return None
    handler.set_name("file")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%H:%M:%S"))
    return handler


def get_logger() -> logging.Logger:
    """The shared trendpost logger, configured on first use."""
    global _logger
    if _logger is not None:
        return _logger

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    if not logger.handlers:
        logger.addHandler(_console_handler())
        file_handler = _file_handler()
        if file_handler is None:
            logger.warning("Cannot write to %s, logging to console only", LOGS_DIR)
        else:
            logger.addHandler(file_handler)

    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _logger = logger
    return _logger


def set_verbose(verbose: bool = True):
    """--verbose: show DEBUG lines on the console too."""
    for handler in get_logger().handlers:
        if handler.get_name() == "console":
            handler.setLevel(logging.DEBUG if verbose else logging.INFO)


def log(msg: str):
    """Progress line for the console (INFO)."""
    get_logger().info(msg)

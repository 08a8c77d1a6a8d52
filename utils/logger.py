"""
utils/logger.py
---------------
Centralized logging configuration.
All modules should use `get_logger(__name__)` to obtain a logger instance.

The level comes from LOG_LEVEL. uvicorn's own loggers are routed
through the same handler so request logs share one format.
"""

import logging
import sys

from config import LOG_LEVEL

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")
_initialized = False


def resolve_level(name: str) -> int:
    """Map a level name such as 'debug' to its number; unknown names give INFO."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _init_logging() -> None:
    global _initialized
    if _initialized:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    root = logging.getLogger()
    root.setLevel(resolve_level(LOG_LEVEL))
    root.addHandler(handler)

    for name in _SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True

    _initialized = True
    if resolve_level(LOG_LEVEL) == logging.INFO and LOG_LEVEL.strip().upper() != "INFO":
        logging.getLogger(__name__).warning(f"Unknown LOG_LEVEL {LOG_LEVEL!r}, using INFO")


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        A configured logging.Logger.
    """
    _init_logging()
    return logging.getLogger(name)

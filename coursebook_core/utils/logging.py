"""Logging utilities.

Log records go to stderr. Standard output is reserved for command results
(issue lines, JSON records, chapter listings) so it can be piped.
"""

import logging
import os
import sys
from functools import wraps
from typing import Any, Callable, TypeVar

PACKAGE_LOGGER = "coursebook_core"

_LOG_LEVEL = os.environ.get("COURSEBOOK_LOG_LEVEL", "INFO").upper()
_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

F = TypeVar("F", bound=Callable[..., Any])


def _level_number(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def get_logger(name: str, level: int | None = None) -> logging.Logger:
    """Get a configured logger.

    Args:
        name: Logger name (typically __name__)
        level: Optional log level override

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        logger.addHandler(handler)

    if level is not None:
        logger.setLevel(level)
    elif logger.level == logging.NOTSET:
        logger.setLevel(_level_number(_LOG_LEVEL))

    return logger


def set_package_level(level: str | int) -> None:
    """Apply a log level to every logger the package has created.

    Used by the CLI so that ``--log-level`` wins over ``COURSEBOOK_LOG_LEVEL``
    for loggers created at import time.

    Args:
        level: Level name (``"DEBUG"``) or numeric level
    """
    number = _level_number(level)
    for name, existing in logging.Logger.manager.loggerDict.items():
        if name.startswith(PACKAGE_LOGGER) and isinstance(existing, logging.Logger):
            existing.setLevel(number)


def log_exceptions(logger: logging.Logger) -> Callable[[F], F]:
    """Decorator that logs an escaping exception with its traceback.

    The exception is re-raised unchanged.

    Args:
        logger: Logger to report to
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.exception(f"Unhandled error in {func.__name__}: {e}")
                raise

        return wrapper  # type: ignore

    return decorator

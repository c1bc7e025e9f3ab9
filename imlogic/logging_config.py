"""
Centralized logging configuration for imlogic.

Levels, format and an optional log file are driven by environment variables:

- ``IMLOGIC_LOG_LEVEL``: level name for the ``imlogic`` logger (default INFO)
- ``IMLOGIC_ENV``: ``production`` selects the structured single-line format
- ``IMLOGIC_LOG_FILE``: when set, also log to a rotating file
"""

import functools
import logging
import logging.config
import os
import sys
import time
from typing import Dict, Any, Optional

LOGGER_ROOT = "imlogic"
_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ContextFilter(logging.Filter):
    """Attach fixed key/value pairs, such as the owning query, to log records."""

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__()
        self.context = context or {}

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self.context.items():
            setattr(record, key, value)
        return True


def get_log_level() -> str:
    """Level from IMLOGIC_LOG_LEVEL; unknown names fall back to INFO."""
    level = os.getenv("IMLOGIC_LOG_LEVEL", "INFO").upper()
    return level if level in _LEVELS else "INFO"


def get_log_format() -> str:
    env = os.getenv("IMLOGIC_ENV", "development").lower()
    if env == "production":
        return "%(asctime)s | %(name)s | %(levelname)s | %(message)s | %(pathname)s:%(lineno)d"
    return "%(asctime)s | %(name)-28s | %(levelname)-8s | %(message)s"


def get_logging_config(level: Optional[str] = None) -> Dict[str, Any]:
    """Build the dictConfig mapping for the current environment."""
    log_level = (level or get_log_level()).upper()

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": get_log_format(),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": "%(asctime)s | %(name)s | %(levelname)s | %(funcName)s:%(lineno)d | %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": "standard",
                "stream": sys.stdout,
            },
        },
        "loggers": {
            LOGGER_ROOT: {
                "level": log_level,
                "handlers": ["console"],
                "propagate": False,
            },
            "uvicorn": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
        },
        "root": {
            "level": "WARNING",
            "handlers": ["console"],
        },
    }

    log_file = os.getenv("IMLOGIC_LOG_FILE")
    if log_file:
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": log_level,
            "formatter": "detailed",
            "filename": log_file,
            "maxBytes": 5 * 1024 * 1024,
            "backupCount": 3,
        }
        config["loggers"][LOGGER_ROOT]["handlers"].append("file")

    return config


def setup_logging(level: Optional[str] = None) -> None:
    """Apply the logging configuration, optionally overriding the level."""
    logging.config.dictConfig(get_logging_config(level))
    logging.getLogger(f"{LOGGER_ROOT}.logging").debug(
        "Logging configured with level: %s", level or get_log_level()
    )


def get_logger(name: str, context: Optional[Dict[str, Any]] = None) -> logging.Logger:
    """
    Get a logger under the ``imlogic`` hierarchy.

    Args:
        name: Logger name (typically __name__ of the module)
        context: Optional context attached to every record; the same context
            is only attached once per logger

    Returns:
        Logger instance
    """
    if not name.startswith(LOGGER_ROOT):
        name = f"{LOGGER_ROOT}.main" if name == "__main__" else f"{LOGGER_ROOT}.{name}"

    logger = logging.getLogger(name)
    if context and not any(
        isinstance(f, ContextFilter) and f.context == context for f in logger.filters
    ):
        logger.addFilter(ContextFilter(context))
    return logger


def log_performance(logger: logging.Logger, operation: str):
    """
    Decorator logging how long ``operation`` took, and failures with timing.

    Args:
        logger: Logger instance to use
        operation: Description of the operation being timed
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.debug(
                    "Operation '%s' failed after %.6fs: %s",
                    operation, time.perf_counter() - start_time, e,
                )
                raise
            logger.debug(
                "Operation '%s' completed in %.6fs", operation, time.perf_counter() - start_time
            )
            return result

        return wrapper

    return decorator


# Initialize logging when module is imported
if not logging.getLogger().handlers:
    setup_logging()

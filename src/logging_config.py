"""Centralized logging configuration for the Music Interpreter.

This module provides a single point for configuring logging across the entire
application. Console logging goes to stderr at WARNING and above so it does not
interleave with the interactive menu; everything else goes to a rotating file.
"""

import logging
import logging.config
import sys
from typing import Any, Dict, Optional

PACKAGE_LOGGER = __name__.rpartition(".")[0] or "src"


def get_logging_config() -> Dict[str, Any]:
    """Get the logging configuration dictionary.

    Returns:
        Dictionary suitable for logging.config.dictConfig()
    """
    # Imported here: config pulls in music_interpreter, whose modules log through
    # this module.
    from .config import get_config

    config = get_config()

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": config.logging.format,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "simple": {"format": "%(levelname)s - %(name)s - %(message)s"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "DEBUG" if config.debug else "WARNING",
                "formatter": "simple",
                "stream": sys.stderr,
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "DEBUG",
                "formatter": "detailed",
                "filename": config.logging.file,
                "maxBytes": 10485760,  # 10MB
                "backupCount": 5,
                "delay": True,
            },
        },
        "loggers": {
            f"{PACKAGE_LOGGER}.music_interpreter": {
                "level": config.logging.interpreter_log_level,
                "handlers": ["console", "file"],
                "propagate": False,
            },
            f"{PACKAGE_LOGGER}.interpreter_cli": {
                "level": config.logging.cli_log_level,
                "handlers": ["console", "file"],
                "propagate": False,
            },
        },
        "root": {
            "level": config.logging.level,
            "handlers": ["console", "file"],
        },
    }


def setup_logging(log_config: Optional[Dict[str, Any]] = None) -> None:
    """Set up logging configuration for the application.

    Args:
        log_config: Optional custom logging configuration. If None, uses default.
    """
    if log_config is None:
        log_config = get_logging_config()

    logging.config.dictConfig(log_config)

    logger = logging.getLogger(__name__)
    logger.info("Logging configuration initialized")


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name.

    Args:
        name: Logger name, typically __name__ from the calling module

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def set_log_level(logger_name: str, level: str) -> None:
    """Dynamically change log level for a specific logger.

    Args:
        logger_name: Name of the logger to modify
        level: New log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.info(f"Log level changed to {level.upper()} for {logger_name}")


class temporary_log_level:
    """Context manager for temporarily changing log level.

    Usage:
        with temporary_log_level('src.music_interpreter', 'DEBUG'):
            # Code that needs debug logging
            pass
    """

    def __init__(self, logger_name: str, level: str):
        self.logger_name = logger_name
        self.new_level = level
        self.original_level = None

    def __enter__(self):
        logger = logging.getLogger(self.logger_name)
        self.original_level = logger.level
        logger.setLevel(getattr(logging, self.new_level.upper(), logging.INFO))
        return logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        logger = logging.getLogger(self.logger_name)
        logger.setLevel(self.original_level)

"""Logger configuration for array_manager."""

import logging
import os
import sys

__all__ = ["logger", "set_level", "setup_logger"]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _level(name: str | None) -> int:
    # Unknown names fall back to INFO instead of failing at startup.
    level = getattr(logging, str(name or "INFO").upper(), None)
    return level if isinstance(level, int) else logging.INFO


def setup_logger(name: str = "array_manager", level: str | None = None) -> logging.Logger:
    """
    Configure and return a logger writing to stdout.

    Args:
        name: Logger name
        level: Log level name; defaults to the LOG_LEVEL environment variable
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        logger.setLevel(_level(level or os.getenv("LOG_LEVEL")))
        logger.propagate = False

    return logger


def set_level(level: str | None) -> None:
    """Change the package logger's level by name."""
    logger.setLevel(_level(level))


logger = setup_logger()

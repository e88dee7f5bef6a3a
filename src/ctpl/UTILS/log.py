"""
Logging setup for the ctpl package.
"""
import logging
import sys
from typing import Optional, Union

LOGGER_NAME = "ctpl"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Returns a logger below the package root logger.

    :param name: Module name, usually ``__name__``.
    :return: The logger.
    """
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def is_valid_level(name: str) -> bool:
    return isinstance(logging.getLevelName(name.strip().upper()), int)


def configure_logging(level: Union[int, str] = logging.WARNING, stream=None) -> logging.Logger:
    """
    Installs a single stream handler on the package logger.
    Calling it again replaces the handler instead of stacking a new one.

    :param level: Level name or number.
    :param stream: Output stream, stderr by default.
    :return: The package logger.
    """
    if isinstance(level, str):
        if not is_valid_level(level):
            raise ValueError(f"Unknown log level: {level}")
        level = logging.getLevelName(level.strip().upper())

    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        if getattr(handler, "_ctpl_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._ctpl_handler = True
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger

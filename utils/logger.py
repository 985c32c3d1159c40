import logging
import sys
from typing import Optional, Union

from utils.settings import get_settings

LOGGER_NAME = "endpoint_trust"
LOG_FORMAT = "[%(levelname)s] [%(name)s] %(message)s"


def configure_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Configure the application-wide logger.

    The level defaults to ``LOG_LEVEL`` from settings. Calling again only
    adjusts the level; the stdout handler is attached once.
    """
    if level is None:
        level = get_settings().log_level
    if isinstance(level, str):
        level = level.strip().upper()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    root = logging.getLogger(LOGGER_NAME)
    if not root.handlers:
        configure_logging()
    if not name:
        return root
    return logging.getLogger(f"{LOGGER_NAME}.{name}")

import logging
from logging import Logger
from typing import Optional

from .config import get_settings

LOG_FORMAT = "[%(levelname)s] %(asctime)s | %(name)s | %(message)s"


def configure_logging(component: Optional[str] = None) -> Logger:
    """Return the application logger, or a child of it for ``component``.

    The handler lives on the root application logger only; component loggers
    propagate to it, so records show which part of the service wrote them.
    """
    settings = get_settings()

    logger = logging.getLogger(settings.app_name)
    if not logger.handlers:
        logger.setLevel(settings.log_level.upper())

        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

        logger.addHandler(handler)
        logger.propagate = False

    return logger.getChild(component) if component else logger

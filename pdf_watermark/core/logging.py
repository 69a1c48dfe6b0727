import logging
from logging import Logger
from typing import Optional

from .config import get_settings

LOG_FORMAT = "[%(levelname)s] %(asctime)s | %(name)s | %(message)s"


def _service_logger() -> Logger:
    settings = get_settings()
    logger = logging.getLogger(settings.app_name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    return logger


def configure_logging(module: Optional[str] = None) -> Logger:
    """Return the service logger, or a child of it named after ``module``.

    Children share the one stream handler on the service logger, so each
    record shows which part of the package produced it.
    """
    root = _service_logger()
    if not module:
        return root
    return root.getChild(module.rsplit(".", 1)[-1])

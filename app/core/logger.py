import logging
import sys

from app.core.config import settings

def setup_logging(level: str = settings.LOG_LEVEL) -> logging.Logger:
    """
    Configure the ``clinicbook`` logger. Services, middleware and the seed script log through it.
    """
    logger = logging.getLogger("clinicbook")
    logger.setLevel(level.upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(handler)

    return logger

logger = setup_logging()

import logging
import sys

from . import config


def setup_logger(name: str = "digipin_api", level: str = config.LOG_LEVEL) -> logging.Logger:
    """
    Setup a logger with a given name and level.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        ch = logging.StreamHandler(sys.stdout)
        ch.setLevel(level)
        formatter = logging.Formatter("%(asctime)s - [%(levelname)s] - %(name)s: %(message)s")
        ch.setFormatter(formatter)
        logger.addHandler(ch)

    return logger

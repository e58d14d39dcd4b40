"""
Logging configuration for the storefront API
"""
import logging
import sys

from .config import Settings

LOGGER_NAME = "storefront"


def setup_logging(settings: Settings) -> logging.Logger:
    """
    Attach a console handler to the package logger.
    Module loggers (storefront.*) inherit it through the logger hierarchy.
    """
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.log_level.upper())

    # Console handler, added once even if setup runs again on reload
    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    logger.propagate = False

    logger.info('Application logging configured (level=%s)', settings.log_level)

    return logger

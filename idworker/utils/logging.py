"""Gives out a production-ready logger.

This module provides:
- setup_logging: a function to route ``idworker`` logging to a rotating file handler
"""

import logging
import os
from logging.handlers import RotatingFileHandler


def setup_logging(settings) -> logging.Logger:
    """Sets logging of the ``idworker`` package to .log file and std stream.

    Args:
        settings: A config class or object with ``DEBUG``, ``LOG_DIR``,
            ``LOG_FILE`` and ``LOG_TO_FILE`` attributes

    Returns:
        logging.Logger: The configured package logger
    """

    log_level = logging.DEBUG if settings.DEBUG else logging.INFO
    logger = logging.getLogger("idworker")

    for handler in logger.handlers:
        handler.close()
    logger.handlers = []

    if settings.LOG_TO_FILE:
        if not os.path.exists(settings.LOG_DIR):
            os.makedirs(settings.LOG_DIR)

        file_handler = RotatingFileHandler(
            os.path.join(settings.LOG_DIR, settings.LOG_FILE), maxBytes=10_000_000, backupCount=5
        )
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]")
        )
        file_handler.setLevel(log_level)
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s: %(message)s"))
    console_handler.setLevel(log_level)
    logger.addHandler(console_handler)

    logger.setLevel(log_level)
    return logger

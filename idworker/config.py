"""Manages configuration variables.

This module provides:
- Config: a base class for pulling environment variables
- DevelopmentConfig: a dev config class for test environments
- ProductionConfig: a config class for production
- config: a dict for getting configuration depending on environment
"""

import os

from dotenv import load_dotenv

from .constants import TWEPOCH

load_dotenv()


class Config:
    """Base class for pulling environment variables.

    Worker and datacenter ids must be unique per running process;
    handing them out is up to whoever deploys the workers.
    """

    WORKER_ID = int(os.getenv("WORKER_ID", "0"))
    DATACENTER_ID = int(os.getenv("DATACENTER_ID", "0"))

    EPOCH = int(os.getenv("EPOCH", str(TWEPOCH)))

    LOG_DIR = os.getenv("LOG_DIR", "logs")
    LOG_FILE = os.getenv("LOG_FILE", "idworker.log")
    LOG_TO_FILE = os.getenv("LOG_TO_FILE", "True").lower() == "true"
    LOG_IDS = os.getenv("LOG_IDS", "False").lower() == "true"


class DevelopmentConfig(Config):
    """Config class with DEBUG on."""

    DEBUG = True


class ProductionConfig(Config):
    """Config class with DEBUG off."""

    DEBUG = False


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
}

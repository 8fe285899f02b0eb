"""Pulls pieces together to hand out a configured ID worker.

This module provides:
- create_worker: a function to get an IdWorker considering a dev/prod environment
"""

from .clock import Clock, ManualClock, SystemClock, current_time_millis, stub_current_time
from .config import config
from .utils.errors import ClockMovedBackwardsError, InvalidIdentityError
from .utils.ids import SnowflakeId, compose_id, parse_id
from .utils.logging import setup_logging
from .worker import IdWorker

__all__ = [
    "Clock",
    "ClockMovedBackwardsError",
    "IdWorker",
    "InvalidIdentityError",
    "ManualClock",
    "SnowflakeId",
    "SystemClock",
    "compose_id",
    "create_worker",
    "current_time_millis",
    "parse_id",
    "stub_current_time",
]


def create_worker(config_name="development", clock=None, **overrides) -> IdWorker:
    """Initializes an IdWorker from environment configuration.

    Args:
        config_name (str): A key of ``config``
        clock: Optional time source passed through to the worker
        **overrides: Config attributes to replace, e.g. ``WORKER_ID=3``

    Raises:
        KeyError: If ``config_name`` is unknown
        InvalidIdentityError: If the configured ids are out of range
    """
    settings = type("Settings", (config[config_name],), overrides)

    logger = setup_logging(settings)

    worker = IdWorker(
        settings.WORKER_ID,
        settings.DATACENTER_ID,
        clock=clock,
        epoch=settings.EPOCH,
    )
    worker.log_ids = settings.LOG_IDS
    logger.info(
        "Worker %d in datacenter %d ready (%s)", worker.worker_id, worker.datacenter_id, config_name
    )
    return worker

"""Shared fixtures for the idworker tests."""

import logging

import pytest

from idworker import IdWorker, ManualClock

# 2024-01-01T00:00:00Z
T0 = 1704067200000


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(T0)


@pytest.fixture
def worker(clock) -> IdWorker:
    return IdWorker(worker_id=3, datacenter_id=7, clock=clock)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("idworker")
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []
    logger.setLevel(logging.NOTSET)

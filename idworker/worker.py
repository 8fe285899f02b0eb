"""A module for handling unique ID generation.

This module provides:
- IdWorker: a class that spits out unique, time-ordered 64-bit IDs
"""

import logging
from collections.abc import Callable
from threading import Lock
from time import sleep

from .clock import Clock, SystemClock
from .constants import MAX_DATACENTER_ID, MAX_WORKER_ID, SEQUENCE_MASK, TWEPOCH
from .utils.errors import ClockMovedBackwardsError, InvalidIdentityError
from .utils.ids import SnowflakeId, compose_id, parse_id


def _check_identity(field: str, value, maximum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidIdentityError(field, value, maximum)
    if value > maximum or value < 0:
        raise InvalidIdentityError(field, value, maximum)
    return value


def _check_sequence(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value > SEQUENCE_MASK or value < 0:
        raise ValueError(f"sequence can't be greater than {SEQUENCE_MASK} or less than 0 (got {value!r})")
    return value


class IdWorker:
    """A class that spits out unique IDs for one worker/datacenter pair.

    Several workers may live in one process as long as their identities differ.
    Calls to ``next_id`` on the same worker are serialized.
    """

    def __init__(
            self,
            worker_id: int,
            datacenter_id: int,
            sequence: int = 0,
            *,
            clock: Clock | Callable[[], int] | None = None,
            epoch: int = TWEPOCH
    ):
        """Validates identity and sets reference variables for enforcing uniqueness.

        Args:
            worker_id (int): 0-31
            datacenter_id (int): 0-31
            sequence (int): Starting sequence 0-4095, only matters until the first new millisecond
            clock (Clock | Callable[[], int] | None): Time source in milliseconds,
                ``SystemClock`` if None
            epoch (int): Reference point in Unix milliseconds

        Raises:
            InvalidIdentityError: If either id is out of range
            ValueError: If the starting sequence is out of range
        """
        self._worker_id = _check_identity("worker Id", worker_id, MAX_WORKER_ID)
        self._datacenter_id = _check_identity("datacenter Id", datacenter_id, MAX_DATACENTER_ID)
        self._epoch = epoch
        self._sequence = _check_sequence(sequence)
        self._last_timestamp = -1
        self._lock = Lock()
        if clock is None:
            clock = SystemClock()
        self._now = clock.now if isinstance(clock, Clock) else clock
        if not callable(self._now):
            raise TypeError("Clock must have a now() method or be callable")
        self.log_ids = False
        self.logger = logging.getLogger(__name__)

    @property
    def worker_id(self) -> int:
        return self._worker_id

    @property
    def datacenter_id(self) -> int:
        return self._datacenter_id

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def sequence(self) -> int:
        """Last issued sequence for the last timestamp.

        On its own this does not convey anything useful.
        """
        return self._sequence

    @property
    def last_timestamp(self) -> int:
        """Timestamp of the last issued ID, -1 before the first one."""
        return self._last_timestamp

    def next_id(self) -> int:
        """Generates the next 64-bit ID.

        Blocks until the next millisecond if this one ran out of sequence numbers.

        Returns:
            int: The ID

        Raises:
            ClockMovedBackwardsError: If the clock is behind the last issued ID
        """
        with self._lock:
            timestamp = self._now()

            if timestamp < self._last_timestamp:
                self.logger.error(
                    "Clock is moving backwards. Rejecting requests until %d.", self._last_timestamp
                )
                raise ClockMovedBackwardsError(self._last_timestamp, timestamp)

            if timestamp == self._last_timestamp:
                self._sequence = (self._sequence + 1) & SEQUENCE_MASK
                if self._sequence == 0:
                    timestamp = self._til_next_millis(self._last_timestamp)
            else:
                self._sequence = 0

            self._last_timestamp = timestamp

            snowflake_id = compose_id(
                timestamp, self._datacenter_id, self._worker_id, self._sequence, self._epoch
            )
            if self.log_ids:
                self.logger.debug("Issued %d", snowflake_id)
            return snowflake_id

    def _til_next_millis(self, last_timestamp: int) -> int:
        """Spins until the clock passes ``last_timestamp`` and returns the new time."""
        self.logger.debug("Sequence exhausted at %d, waiting for the next millisecond", last_timestamp)
        timestamp = self._now()
        while timestamp <= last_timestamp:
            sleep(0)
            timestamp = self._now()
        return timestamp

    def parse(self, snowflake_id: int) -> SnowflakeId:
        """Decodes an ID against this worker's epoch."""
        return parse_id(snowflake_id, self._epoch)

    def __repr__(self) -> str:
        return f"IdWorker(worker_id={self._worker_id}, datacenter_id={self._datacenter_id})"

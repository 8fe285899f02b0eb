"""Packing and unpacking of generated IDs.

This module provides:
- SnowflakeId: a named tuple of the fields stored in an ID
- compose_id: a function that packs the fields into an integer
- parse_id: a function that splits an integer back into its fields
"""

from datetime import UTC, datetime
from typing import NamedTuple

from ..constants import (
    DATACENTER_ID_SHIFT,
    MAX_DATACENTER_ID,
    MAX_WORKER_ID,
    SEQUENCE_MASK,
    TIMESTAMP_LEFT_SHIFT,
    TWEPOCH,
    WORKER_ID_SHIFT,
)


class SnowflakeId(NamedTuple):
    """Fields of a decoded ID. ``timestamp`` is in Unix milliseconds."""

    timestamp: int
    datacenter_id: int
    worker_id: int
    sequence: int

    def to_datetime(self) -> datetime:
        """Returns the generation time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.timestamp / 1000, tz=UTC)


def compose_id(
        timestamp: int,
        datacenter_id: int,
        worker_id: int,
        sequence: int,
        epoch: int = TWEPOCH
) -> int:
    """Packs ID fields into a single integer.

    Args:
        timestamp (int): Unix milliseconds, not earlier than ``epoch``
        datacenter_id (int): 0-31
        worker_id (int): 0-31
        sequence (int): 0-4095
        epoch (int): The reference point subtracted from ``timestamp``

    Returns:
        int: The ID
    """
    return ((timestamp - epoch) << TIMESTAMP_LEFT_SHIFT) | \
        (datacenter_id << DATACENTER_ID_SHIFT) | \
        (worker_id << WORKER_ID_SHIFT) | \
        sequence


def parse_id(snowflake_id: int, epoch: int = TWEPOCH) -> SnowflakeId:
    """Splits an ID back into the fields it was composed from.

    IDs from a clock earlier than ``epoch`` are negative; the shifts are
    arithmetic, so they decode the same way.

    Args:
        snowflake_id (int): An ID produced with the same ``epoch``
        epoch (int): The reference point the ID was generated against

    Returns:
        SnowflakeId: The decoded fields
    """
    return SnowflakeId(
        timestamp=(snowflake_id >> TIMESTAMP_LEFT_SHIFT) + epoch,
        datacenter_id=(snowflake_id >> DATACENTER_ID_SHIFT) & MAX_DATACENTER_ID,
        worker_id=(snowflake_id >> WORKER_ID_SHIFT) & MAX_WORKER_ID,
        sequence=snowflake_id & SEQUENCE_MASK,
    )

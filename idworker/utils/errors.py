"""Errors tailored for this project.

This module provides:
- InvalidIdentityError: An error if a worker or datacenter id is out of range
- ClockMovedBackwardsError: An error if the clock went back since the last ID
"""


class InvalidIdentityError(ValueError):
    """A worker or datacenter id does not fit its bit field."""

    def __init__(self, field: str, value, maximum: int):
        self.field = field
        self.value = value
        self.maximum = maximum
        super().__init__(f"{field} can't be greater than {maximum} or less than 0 (got {value!r})")


class ClockMovedBackwardsError(RuntimeError):
    """The clock returned a time earlier than the last issued ID."""

    def __init__(self, last_timestamp: int, timestamp: int):
        self.last_timestamp = last_timestamp
        self.timestamp = timestamp
        self.offset = last_timestamp - timestamp
        super().__init__(
            f"Clock moved backwards. Refusing to generate id for {self.offset} milliseconds"
        )

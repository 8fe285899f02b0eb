"""Time sources for ID generation.

This module provides:
- current_time_millis: a function returning milliseconds since the Unix epoch
- stub_current_time: a function that temporarily replaces the process-wide time source
- StubbedTime: a context manager handle that restores the previous time source
- Clock: a protocol for anything that can tell the time in milliseconds
- SystemClock: a clock reading ``current_time_millis``
- ManualClock: a clock that only moves when told to
"""

from collections.abc import Callable
from contextlib import AbstractContextManager
from threading import Lock
from time import time_ns
from typing import Protocol, runtime_checkable

from .constants import TWEPOCH


def _wall_clock_millis() -> int:
    return time_ns() // 1_000_000


_provider: Callable[[], int] = _wall_clock_millis


def current_time_millis() -> int:
    """Returns the current time in milliseconds since the Unix epoch."""
    return _provider()


class StubbedTime(AbstractContextManager):
    """Handle of an active time stub.

    The stub is installed on creation. Leaving the ``with`` block or calling
    ``restore`` puts back whatever provider was active before it.
    """

    def __init__(self, provider: Callable[[], int]):
        global _provider
        self._previous = _provider
        self._restored = False
        _provider = provider

    def restore(self) -> None:
        """Reinstates the previous time source. Safe to call twice."""
        global _provider
        if self._restored:
            return
        _provider = self._previous
        self._restored = True

    def __exit__(self, exc_type, exc_value, traceback):
        self.restore()


def stub_current_time(provider: Callable[[], int] | int) -> StubbedTime:
    """Overrides ``current_time_millis`` until the returned handle is closed.

    Args:
        provider (Callable[[], int] | int): A function returning milliseconds,
            or a fixed number of milliseconds to freeze the clock at

    Returns:
        StubbedTime: A handle usable as a context manager
    """
    if isinstance(provider, int):
        millis = provider
        return StubbedTime(lambda: millis)
    if not callable(provider):
        raise TypeError("Time provider must be a callable or an integer")
    return StubbedTime(provider)


@runtime_checkable
class Clock(Protocol):
    """Anything that can report the current time in milliseconds."""

    def now(self) -> int: ...


class SystemClock:
    """Reads the process-wide time source, stubs included."""

    def now(self) -> int:
        return current_time_millis()


class ManualClock:
    """A deterministic clock for tests and simulations.

    Time only changes through ``set``/``advance``, or through ``after_polls``
    which moves the clock forward once it has been read a given number of times.
    Starts at ``TWEPOCH`` unless told otherwise.
    """

    def __init__(self, start: int = TWEPOCH):
        self._millis = start
        self._polls = 0
        self._pending: tuple[int, int] | None = None
        self._lock = Lock()

    @property
    def polls(self) -> int:
        """How many times ``now`` has been called."""
        return self._polls

    def now(self) -> int:
        with self._lock:
            self._polls += 1
            if self._pending is not None and self._polls >= self._pending[0]:
                self._millis = self._pending[1]
                self._pending = None
            return self._millis

    def set(self, millis: int) -> None:
        with self._lock:
            self._millis = millis

    def advance(self, millis: int = 1) -> int:
        """Moves the clock forward and returns the new time."""
        with self._lock:
            self._millis += millis
            return self._millis

    def after_polls(self, polls: int, millis: int) -> None:
        """Jumps to ``millis`` once ``now`` has been called ``polls`` more times."""
        with self._lock:
            self._pending = (self._polls + polls, millis)

    def __call__(self) -> int:
        return self.now()

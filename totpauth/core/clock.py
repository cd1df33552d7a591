"""
Time sources for TOTP verification.
"""

import time
from abc import ABC, abstractmethod


class Clock(ABC):
    """Provides the current time as Unix seconds."""

    @abstractmethod
    def now(self) -> float:
        raise NotImplementedError


class SystemClock(Clock):
    """Wall-clock time from :func:`time.time`."""

    def now(self) -> float:
        return time.time()

    def __repr__(self) -> str:
        return "SystemClock()"


class FixedClock(Clock):
    """
    A clock frozen at ``timestamp``.

    Useful for tests and for checking a code against a known instant::

        >>> FixedClock(59).now()
        59.0
    """

    def __init__(self, timestamp: float) -> None:
        self._timestamp = float(timestamp)

    def now(self) -> float:
        return self._timestamp

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedClock):
            return NotImplemented
        return self._timestamp == other._timestamp

    def __hash__(self) -> int:
        return hash(self._timestamp)

    def __repr__(self) -> str:
        return f"FixedClock({self._timestamp!r})"

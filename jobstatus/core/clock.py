"""
Time source for progress math and write throttling.

Timestamps are wall-clock epoch seconds because they are persisted and
compared by readers in other processes. The same clock instance drives
both throttling and time-based extrapolation within a worker.

Dependencies: time (stdlib)
System role: Injectable clock
"""

import time
from typing import Protocol


class Clock(Protocol):
    """Anything that can report the current time in epoch seconds."""

    def now(self) -> float:
        ...


class SystemClock:
    """Clock backed by time.time()."""

    def now(self) -> float:
        return time.time()


system_clock = SystemClock()

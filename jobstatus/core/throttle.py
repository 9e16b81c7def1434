"""
Write throttling for status persistence.

Bounds how often intra-job updates hit the shared store while lifecycle
boundaries still write unconditionally.

Dependencies: jobstatus.core.clock
System role: Store write-rate limiter
"""

import logging
from typing import Callable

from jobstatus.core.clock import Clock

logger = logging.getLogger(__name__)


class UpdateThrottle:
    """Decides whether a status write happens now or is skipped."""

    def __init__(self, clock: Clock, min_interval: float = 0.5) -> None:
        """
        Initialize throttle.

        Args:
            clock: Same clock used for progress time math
            min_interval: Minimum seconds between throttled writes
        """
        self._clock = clock
        self._min_interval = min_interval
        self._last_persisted_at: float | None = None

    @property
    def last_persisted_at(self) -> float | None:
        return self._last_persisted_at

    def is_due(self) -> bool:
        if self._last_persisted_at is None:
            return True
        return self._clock.now() - self._last_persisted_at > self._min_interval

    def force_save(self, save: Callable[[], None]) -> None:
        """Persist unconditionally; the timestamp only moves once the write succeeded."""
        save()
        self._last_persisted_at = self._clock.now()

    def maybe_save(self, save: Callable[[], None]) -> bool:
        """
        Persist only if the minimum interval has elapsed since the last write.

        Returns:
            bool: True if the write happened
        """
        if not self.is_due():
            logger.debug(f"{__name__}:maybe_save - Skipping throttled status write")
            return False
        self.force_save(save)
        return True

"""
In-memory key-value store.

Process-local store with TTL semantics matching Redis closely enough for
local development and tests. Not shared between processes.

Dependencies: threading (stdlib), jobstatus.core.clock
System role: Development status store
"""

import threading

from jobstatus.core.clock import Clock, system_clock


def _lrange(items: list[str], start: int, end: int) -> list[str]:
    size = len(items)
    if start < 0:
        start = max(size + start, 0)
    if end < 0:
        end = size + end
    if start >= size or start > end:
        return []
    return items[start:end + 1]


class InMemoryKeyValueStore:
    """KeyValueStore kept in a dictionary."""

    def __init__(self, clock: Clock = system_clock) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._values: dict[str, str] = {}
        self._lists: dict[str, list[str]] = {}
        self._expires_at: dict[str, float] = {}
        self.write_count = 0

    def _evict_if_expired(self, key: str) -> None:
        expires_at = self._expires_at.get(key)
        if expires_at is not None and self._clock.now() >= expires_at:
            self._values.pop(key, None)
            self._lists.pop(key, None)
            self._expires_at.pop(key, None)

    def get(self, key: str) -> str | None:
        with self._lock:
            self._evict_if_expired(key)
            return self._values.get(key)

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        with self._lock:
            self._values[key] = value
            self._expires_at[key] = self._clock.now() + ttl_seconds
            self.write_count += 1

    def list_append(self, key: str, value: str, ttl_seconds: int) -> None:
        with self._lock:
            self._evict_if_expired(key)
            self._lists.setdefault(key, []).append(value)
            self._expires_at[key] = self._clock.now() + ttl_seconds
            self.write_count += 1

    def list_range(self, key: str, start: int, end: int) -> list[str]:
        with self._lock:
            self._evict_if_expired(key)
            return _lrange(self._lists.get(key, []), start, end)

    def ping(self) -> bool:
        return True

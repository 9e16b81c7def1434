"""
Key-value store interface.

The only I/O boundary of the tracking subsystem. Every write carries a TTL
so abandoned keys expire on their own.

Dependencies: typing (stdlib)
System role: Store abstraction shared by Redis and in-memory adapters
"""

from typing import Protocol


class KeyValueStore(Protocol):
    """Minimal store surface needed for status tracking."""

    def get(self, key: str) -> str | None:
        """Return the value under key, or None if absent or expired."""
        ...

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Overwrite key and refresh its TTL."""
        ...

    def list_append(self, key: str, value: str, ttl_seconds: int) -> None:
        """Append value to the list under key and refresh its TTL."""
        ...

    def list_range(self, key: str, start: int, end: int) -> list[str]:
        """Return list items between start and end inclusive (negative indexes count from the tail)."""
        ...

    def ping(self) -> bool:
        """Check store reachability."""
        ...

"""
Redis key-value store adapter.

Wraps redis-py and translates connection/timeout failures into
TransientStoreError. Timeouts come from the client's socket_timeout; this
layer never retries.

Dependencies: redis, jobstatus.core.exceptions
System role: Production status store
"""

import logging
from contextlib import contextmanager
from typing import Iterator

import redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from jobstatus.core.exceptions import TransientStoreError

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(operation: str, key: str | None = None) -> Iterator[None]:
    try:
        yield
    except (RedisConnectionError, RedisTimeoutError) as e:
        logger.error(f"{__name__}:{operation} - Store unavailable: {e}")
        raise TransientStoreError(
            f"Status store unavailable during {operation}",
            operation=operation,
            key=key,
            details={"cause": str(e)},
        ) from e


class RedisKeyValueStore:
    """KeyValueStore backed by a Redis server."""

    def __init__(self, client: redis.Redis) -> None:
        """
        Initialize adapter.

        Args:
            client: redis-py client created with decode_responses=True
        """
        self._client = client

    @classmethod
    def from_url(cls, url: str, socket_timeout: float | None = None) -> "RedisKeyValueStore":
        """
        Build adapter from a connection URL.

        Args:
            url: redis:// connection URL
            socket_timeout: Per-operation socket timeout in seconds

        Returns:
            RedisKeyValueStore: Connected adapter (connection is lazy)
        """
        client = redis.Redis.from_url(
            url,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
            decode_responses=True,
        )
        return cls(client)

    def get(self, key: str) -> str | None:
        with _store_errors("get", key):
            return self._client.get(key)

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        with _store_errors("set", key):
            self._client.set(key, value, ex=ttl_seconds)

    def list_append(self, key: str, value: str, ttl_seconds: int) -> None:
        with _store_errors("rpush", key):
            pipe = self._client.pipeline()
            pipe.rpush(key, value)
            pipe.expire(key, ttl_seconds)
            pipe.execute()

    def list_range(self, key: str, start: int, end: int) -> list[str]:
        with _store_errors("lrange", key):
            return list(self._client.lrange(key, start, end))

    def ping(self) -> bool:
        with _store_errors("ping"):
            return bool(self._client.ping())

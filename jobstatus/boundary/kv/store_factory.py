"""
Status store factory selecting between Redis (prod) and in-memory (dev).

Depends on the JOBSTATUS_STORE_BACKEND environment variable.

Dependencies: jobstatus.boundary.kv, jobstatus.configs
System role: Status store instantiation and selection
"""

import logging

from jobstatus.boundary.kv.interface import KeyValueStore
from jobstatus.boundary.kv.keys import KeySpace
from jobstatus.boundary.kv.memory_store import InMemoryKeyValueStore
from jobstatus.boundary.kv.redis_store import RedisKeyValueStore
from jobstatus.boundary.kv.status_store import StatusStore
from jobstatus.configs import Settings, get_settings

logger = logging.getLogger(__name__)


def get_key_value_store(settings: Settings | None = None) -> KeyValueStore:
    """
    Create the key-value store configured for this process.

    Args:
        settings: Application settings (defaults to the cached singleton)

    Returns:
        KeyValueStore: Redis or in-memory adapter

    Raises:
        ValueError: If JOBSTATUS_STORE_BACKEND is invalid
    """
    settings = settings or get_settings()
    backend = settings.tracking.store_backend.lower()

    if backend == "redis":
        logger.info(f"{__name__}:get_key_value_store - Using Redis status store at {settings.redis.host}")
        return RedisKeyValueStore.from_url(
            settings.redis.url,
            socket_timeout=settings.redis.socket_timeout,
        )

    elif backend == "memory":
        logger.info(f"{__name__}:get_key_value_store - Using in-memory status store (local dev mode)")
        return InMemoryKeyValueStore()

    else:
        raise ValueError(
            f"Invalid JOBSTATUS_STORE_BACKEND: {backend}. "
            f"Must be 'redis' (production) or 'memory' (dev)."
        )


def get_status_store(settings: Settings | None = None) -> StatusStore:
    """
    Create a StatusStore over the configured key-value store.

    Args:
        settings: Application settings (defaults to the cached singleton)

    Returns:
        StatusStore: Status persistence with configured TTL and key prefix
    """
    settings = settings or get_settings()
    return StatusStore(
        get_key_value_store(settings),
        ttl_seconds=settings.tracking.status_ttl_seconds,
        keys=KeySpace(settings.tracking.key_prefix),
    )

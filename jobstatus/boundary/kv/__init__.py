"""
Key-value store adapters and status persistence.
"""

from jobstatus.boundary.kv.interface import KeyValueStore
from jobstatus.boundary.kv.keys import CONTROL_ABORT, KeySpace
from jobstatus.boundary.kv.memory_store import InMemoryKeyValueStore
from jobstatus.boundary.kv.redis_store import RedisKeyValueStore
from jobstatus.boundary.kv.status_store import StatusStore

__all__ = [
    "CONTROL_ABORT",
    "InMemoryKeyValueStore",
    "KeySpace",
    "KeyValueStore",
    "RedisKeyValueStore",
    "StatusStore",
]

"""
Test suite for InMemoryKeyValueStore.

System role: Verification of the development store
"""

import pytest

from jobstatus.boundary.kv.memory_store import InMemoryKeyValueStore


class TestInMemoryKeyValueStore:
    """Test suite for InMemoryKeyValueStore."""

    def test_value_should_expire_after_ttl(self, kv_store: InMemoryKeyValueStore, clock) -> None:
        kv_store.set("k", "v", ttl_seconds=10)

        clock.advance(9)
        assert kv_store.get("k") == "v"

        clock.advance(1)
        assert kv_store.get("k") is None

    def test_list_append_should_refresh_list_ttl(self, kv_store: InMemoryKeyValueStore, clock) -> None:
        kv_store.list_append("l", "a", ttl_seconds=10)
        clock.advance(8)
        kv_store.list_append("l", "b", ttl_seconds=10)
        clock.advance(8)

        assert kv_store.list_range("l", 0, -1) == ["a", "b"]

    @pytest.mark.parametrize(
        "start, end, expected",
        [
            (0, -1, ["a", "b", "c", "d"]),
            (-2, -1, ["c", "d"]),
            (-10, -1, ["a", "b", "c", "d"]),
            (1, 2, ["b", "c"]),
            (5, 9, []),
        ],
    )
    def test_list_range_should_follow_redis_lrange_indices(
        self, kv_store: InMemoryKeyValueStore, start: int, end: int, expected: list[str]
    ) -> None:
        for value in "abcd":
            kv_store.list_append("l", value, ttl_seconds=10)

        assert kv_store.list_range("l", start, end) == expected

    def test_write_count_should_count_writes_only(self, kv_store: InMemoryKeyValueStore) -> None:
        kv_store.set("k", "v", 10)
        kv_store.get("k")
        kv_store.list_append("l", "a", 10)

        assert kv_store.write_count == 2

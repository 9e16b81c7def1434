"""
Test suite for the status store factory.

System role: Verification of store backend selection
"""

from unittest.mock import patch

import pytest

from jobstatus.boundary.kv.memory_store import InMemoryKeyValueStore
from jobstatus.boundary.kv.store_factory import get_key_value_store, get_status_store
from jobstatus.configs import Settings
from jobstatus.configs.redis_store import RedisSettings
from jobstatus.configs.tracking import TrackingSettings


class TestStoreFactory:
    """Test suite for get_key_value_store / get_status_store."""

    def test_memory_backend_should_build_in_memory_store(self) -> None:
        settings = Settings(tracking=TrackingSettings(store_backend="memory"))

        assert isinstance(get_key_value_store(settings), InMemoryKeyValueStore)

    def test_redis_backend_should_build_from_settings_url(self) -> None:
        settings = Settings(
            redis=RedisSettings(host="cache", port=6380, db=2, socket_timeout=1.5),
            tracking=TrackingSettings(store_backend="redis"),
        )

        with patch("jobstatus.boundary.kv.store_factory.RedisKeyValueStore.from_url") as mock_from_url:
            store = get_key_value_store(settings)

        mock_from_url.assert_called_once_with(settings.redis.url, socket_timeout=1.5)
        assert store is mock_from_url.return_value

    def test_invalid_backend_should_raise_value_error(self) -> None:
        settings = Settings(tracking=TrackingSettings(store_backend="sqlite"))

        with pytest.raises(ValueError, match="JOBSTATUS_STORE_BACKEND"):
            get_key_value_store(settings)

    def test_status_store_should_use_configured_ttl_and_prefix(self) -> None:
        settings = Settings(
            tracking=TrackingSettings(store_backend="memory", status_ttl_seconds=120, key_prefix="app")
        )

        status_store = get_status_store(settings)
        status_store.set_control("job-1")

        assert status_store.ttl_seconds == 120
        assert status_store.get_control("job-1") is True

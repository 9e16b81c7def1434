"""
Test suite for configuration settings.

System role: Verification of environment-driven configuration
"""

import pytest
from pydantic import ValidationError

from jobstatus.configs.base import BaseSettings
from jobstatus.configs.celery_config import CelerySettings
from jobstatus.configs.redis_store import RedisSettings
from jobstatus.configs.tracking import TrackingSettings


class TestBaseSettings:
    """Test suite for settings shared by API and worker."""

    def test_defaults(self, monkeypatch) -> None:
        for name in ("APP_NAME", "ENVIRONMENT", "DEBUG", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = BaseSettings(_env_file=None)

        assert settings.app_name == "jobstatus"
        assert settings.environment == "development"
        assert settings.effective_log_level == "INFO"

    def test_log_level_should_be_normalised(self, monkeypatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", " warning ")

        assert BaseSettings(_env_file=None).log_level == "WARNING"

    @pytest.mark.parametrize("field, value", [("log_level", "LOUD"), ("environment", "qa"), ("app_name", "")])
    def test_invalid_values_should_be_rejected(self, field, value) -> None:
        with pytest.raises(ValidationError):
            BaseSettings(_env_file=None, **{field: value})

    def test_debug_should_force_debug_logging(self) -> None:
        settings = BaseSettings(_env_file=None, debug=True, log_level="error")

        assert settings.log_level == "ERROR"
        assert settings.effective_log_level == "DEBUG"


class TestTrackingSettings:
    """Test suite for TrackingSettings."""

    def test_defaults(self, monkeypatch) -> None:
        for name in ("JOBSTATUS_STATUS_TTL_SECONDS", "JOBSTATUS_MIN_UPDATE_INTERVAL_SECONDS"):
            monkeypatch.delenv(name, raising=False)

        settings = TrackingSettings(_env_file=None)

        assert settings.status_ttl_seconds == 3 * 24 * 60 * 60
        assert settings.min_update_interval_seconds == 0.5
        assert settings.default_part_weight == 0.5
        assert settings.index_list_limit == 9999

    def test_environment_should_override_with_prefix(self, monkeypatch) -> None:
        monkeypatch.setenv("JOBSTATUS_STATUS_TTL_SECONDS", "60")
        monkeypatch.setenv("JOBSTATUS_KEY_PREFIX", "app")

        settings = TrackingSettings(_env_file=None)

        assert settings.status_ttl_seconds == 60
        assert settings.key_prefix == "app"

    def test_non_positive_ttl_should_be_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TrackingSettings(_env_file=None, status_ttl_seconds=0)


class TestConnectionSettings:
    """Test suite for Redis and Celery URL construction."""

    def test_redis_url_should_include_password_when_set(self) -> None:
        settings = RedisSettings(_env_file=None, host="cache", port=6380, db=2, password="s3cret")

        assert settings.url == "redis://:s3cret@cache:6380/2"

    def test_celery_urls(self) -> None:
        settings = CelerySettings(
            _env_file=None,
            broker_host="mq",
            broker_user="u",
            broker_password="p",
            result_backend_host="cache",
        )

        assert settings.broker_url == "amqp://u:p@mq:5672//"
        assert settings.result_backend_url == "redis://cache:6379/0"
        assert settings.task_track_started is True

"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Shared by the Celery worker and the FastAPI status API.

Dependencies: All config modules
System role: Central configuration aggregator
"""

from functools import lru_cache

from jobstatus.configs.base import BaseSettings
from jobstatus.configs.celery_config import CelerySettings
from jobstatus.configs.redis_store import RedisSettings
from jobstatus.configs.tracking import TrackingSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    redis: RedisSettings = RedisSettings()
    celery: CelerySettings = CelerySettings()
    tracking: TrackingSettings = TrackingSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from jobstatus.configs import get_settings
        settings = get_settings()
    """
    return Settings()

"""
Job tracking configuration settings.

Status record lifetime, write throttling and store key layout.

Dependencies: pydantic, pydantic_settings
System role: Tuning knobs for progress persistence and reconciliation
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from jobstatus.configs.base import BaseSettings

DEFAULT_STATUS_TTL_SECONDS = 3 * 24 * 60 * 60
DEFAULT_MIN_UPDATE_INTERVAL_SECONDS = 0.5


class TrackingSettings(BaseSettings):
    """Status tracking configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="JOBSTATUS_",
        case_sensitive=False,
        extra="ignore",
    )

    store_backend: str = Field(
        default="redis",
        description="Status store backend ('redis' or 'memory' for local runs)",
    )
    status_ttl_seconds: int = Field(
        default=DEFAULT_STATUS_TTL_SECONDS,
        gt=0,
        description="TTL for status records, control flags and class index",
    )
    min_update_interval_seconds: float = Field(
        default=DEFAULT_MIN_UPDATE_INTERVAL_SECONDS,
        ge=0,
        description="Minimum seconds between throttled status writes",
    )
    key_prefix: str = Field(
        default="",
        description="Optional namespace prepended to every store key",
    )
    default_part_weight: float = Field(
        default=0.5,
        ge=0,
        le=1,
        description="Weight used by next_part() when the job does not pass one",
    )
    index_list_limit: int = Field(
        default=9999,
        gt=0,
        description="Default number of job ids returned per class listing",
    )
    job_modules: list[str] = Field(
        default=["jobstatus.workers.example_jobs"],
        description="Modules imported at start-up to register job classes",
    )

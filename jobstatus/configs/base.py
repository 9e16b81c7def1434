"""
Base configuration settings.

Settings shared by the status API and the Celery worker: the service name
both processes register under, the deployment environment and the log
level. Values come from the process environment or a local .env file.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from typing import Literal

from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict
from pydantic import Field, field_validator

LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class BaseSettings(PydanticBaseSettings):
    """Common settings for API and worker processes."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(
        default="jobstatus",
        min_length=1,
        description="Celery app name and API title prefix",
    )
    environment: Literal["development", "staging", "production", "test"] = Field(
        default="development",
        description="Deployment environment",
    )
    debug: bool = Field(
        default=False,
        description="Auto-reload the API server and log at DEBUG",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level for API and worker processes",
    )

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def effective_log_level(self) -> str:
        """Log level actually applied; debug mode forces DEBUG."""
        return "DEBUG" if self.debug else self.log_level

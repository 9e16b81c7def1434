"""
Redis configuration settings.

Connection parameters for the key-value store that holds status records,
control flags and the per-class job index.

Dependencies: pydantic, pydantic_settings
System role: Status store connection configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from jobstatus.configs.base import BaseSettings


class RedisSettings(BaseSettings):
    """Redis connection configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="REDIS_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Redis host")
    port: int = Field(default=6379, description="Redis port")
    db: int = Field(default=1, description="Redis database number for status records")
    password: str | None = Field(default=None, description="Redis password")
    socket_timeout: float = Field(
        default=5.0,
        description="Socket timeout in seconds for every store round-trip",
    )

    @property
    def url(self) -> str:
        """
        Construct Redis connection URL.

        Returns:
            str: redis-py compatible connection URL
        """
        auth = f":{self.password}@" if self.password else ""
        return f"redis://{auth}{self.host}:{self.port}/{self.db}"

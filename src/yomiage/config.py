"""Yomiage Configuration Management.

Uses Pydantic Settings for type-safe configuration with environment variable support.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RedisSettings(BaseSettings):
    """Redis connection settings."""

    model_config = SettingsConfigDict(env_prefix="REDIS_")

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    password: str | None = None

    @property
    def url(self) -> str:
        """Build Redis URL."""
        if self.password:
            return f"redis://:{self.password}@{self.host}:{self.port}/{self.db}"
        return f"redis://{self.host}:{self.port}/{self.db}"


class ReadingSettings(BaseSettings):
    """Message reading (text normalization) settings."""

    model_config = SettingsConfigDict(env_prefix="READING_")

    # Length capping
    max_chars: int = Field(default=60, gt=0)
    truncated_chars: int = Field(default=55, ge=0)
    omission_marker: str = "、以下 略"

    # Author announcement
    author_repeat_window_seconds: float = Field(default=10.0, ge=0)
    author_separator: str = "。"

    # Filtering / scrubbing
    ignore_prefix: str = ";"
    url_replacement: str = "、"

    # Speech queue
    queue_max_size: int = Field(default=100, gt=0)

    @model_validator(mode="after")
    def check_truncation(self) -> ReadingSettings:
        """Truncated length can never exceed the cap."""
        if self.truncated_chars > self.max_chars:
            raise ValueError("truncated_chars must not exceed max_chars")
        return self


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="YOMIAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    env: Literal["development", "staging", "production"] = "development"
    debug: bool = False

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Nested settings
    redis: RedisSettings = Field(default_factory=RedisSettings)
    reading: ReadingSettings = Field(default_factory=ReadingSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are loaded once and reused.
    """
    return Settings()

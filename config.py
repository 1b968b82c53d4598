"""Configuration for the cyber-law search app."""

from __future__ import annotations

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Load configuration from CYBERLAW_* environment variables and .env files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CYBERLAW_",
        extra="ignore",
    )

    news_api_key: str = Field(
        default="",
        description="NewsAPI key used to fetch cybersecurity news.",
    )
    news_api_url: str = Field(
        default="https://newsapi.org/v2/everything",
        description="NewsAPI 'everything' endpoint.",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        ge=1.0,
        description="HTTP timeout for news requests in seconds.",
    )
    news_page_size: int = Field(
        default=50,
        ge=1,
        le=100,
        description="Articles requested per news page.",
    )
    cache_ttl_seconds: float = Field(
        default=300.0,
        ge=0.0,
        description="Lifetime of cached search results (0 = no expiry).",
    )
    cache_max_entries: int = Field(
        default=256,
        ge=1,
        description="Maximum number of cached search results.",
    )
    debounce_delay_seconds: float = Field(
        default=0.3,
        ge=0.0,
        description="Quiet period before a typed query is searched.",
    )
    log_level: str = Field(
        default="INFO",
        description="Python logging level.",
    )

    @property
    def logging_level(self) -> int:
        """Resolve the configured log level to a logging constant."""

        level = getattr(logging, self.log_level.upper(), None)
        if isinstance(level, int):
            return level
        return logging.INFO

"""Application settings for the Slate Planner service."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralised configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_prefix="SLATEPLANNER_", case_sensitive=False)

    app_name: str = "Slate Planner"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Plan catalog
    catalog_path: Path | None = None

    # HTTP
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Rate limiting / monitoring
    rate_limit_requests: int = 100
    rate_limit_window_seconds: int = 60
    rate_limit_storage_url: str | None = None
    redis_url: str | None = None
    sentry_dsn: str | None = None
    enable_prometheus: bool = True
    metrics_namespace: str = "slateplanner"

    @property
    def resolved_rate_limit_storage(self) -> str:
        if self.rate_limit_storage_url:
            return self.rate_limit_storage_url
        if self.redis_url:
            return f"redis://{self.redis_url.split('://')[-1]}"
        return "memory://"


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()


__all__ = ["Settings", "get_settings"]

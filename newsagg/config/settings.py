"""Application settings with environment variable support."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import model_validator
from typing import Optional
from pathlib import Path


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="NEWSAGG_",  # NEWSAGG_FEED_TIMEOUT_SECONDS, NEWSAGG_PORT, etc.
    )

    # Sources - JSON override for the built-in table
    sources_file: Optional[Path] = None

    # Ingestion
    user_agent: str = "UK-Compliant-News-Aggregator/1.0 (GDPR Compliant)"
    feed_timeout_seconds: float = 10.0
    page_timeout_seconds: float = 5.0
    items_per_source: int = 5
    fetch_max_attempts: int = 1  # 1 = no retries
    max_concurrent_requests: int = 10
    resolve_page_images: bool = True

    # API
    default_limit: int = 20
    max_limit: int = 100
    host: str = "0.0.0.0"
    port: int = 8000

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"  # "console" or "json"

    @model_validator(mode="after")
    def check_limits(self):
        if self.items_per_source < 1:
            raise ValueError("items_per_source must be at least 1")
        if self.fetch_max_attempts < 1:
            raise ValueError("fetch_max_attempts must be at least 1")
        if self.max_concurrent_requests < 1:
            raise ValueError("max_concurrent_requests must be at least 1")
        if not 1 <= self.default_limit <= self.max_limit:
            raise ValueError("default_limit must be between 1 and max_limit")
        return self


settings = Settings()

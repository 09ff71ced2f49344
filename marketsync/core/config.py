# marketsync/core/config.py

import os
from enum import Enum
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class OverlapPolicy(str, Enum):
    """What a job does when its previous run is still in flight."""
    SKIP = "skip"
    QUEUE = "queue"
    ALLOW = "allow"


class Settings(BaseSettings):
    """
    Application settings.
    Loads values from environment variables (.env file)
    """
    # Shopify Admin API (source platform)
    SHOPIFY_STORE_URL: str
    SHOPIFY_ACCESS_TOKEN: str
    SHOPIFY_API_VERSION: str = "2025-01"

    # Back Market API (destination platform)
    BACKMARKET_API_KEY: str
    BACKMARKET_API_URL: str = "https://api.backmarket.com/v1"

    # HTTP listener
    PORT: int = 7001

    # Scheduling
    SYNC_SCHEDULE: str = "*/5 * * * *"  # Every 5 minutes, wall-clock aligned
    SYNC_SCHEDULE_ENABLED: bool = True
    SYNC_OVERLAP_POLICY: OverlapPolicy = OverlapPolicy.SKIP

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=os.environ.get('ENV_FILE', '.env'),
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("SHOPIFY_STORE_URL")
    @classmethod
    def _strip_store_url(cls, value: str) -> str:
        # Accept "https://shop.myshopify.com/" as well as the bare host
        value = value.strip()
        for prefix in ("https://", "http://"):
            if value.startswith(prefix):
                value = value[len(prefix):]
        return value.rstrip("/")

    @field_validator("BACKMARKET_API_URL")
    @classmethod
    def _strip_api_url(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @field_validator("SYNC_OVERLAP_POLICY", mode="before")
    @classmethod
    def _lower_policy(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


@lru_cache()
def get_settings():
    """Cached settings so entry points build the configuration once"""
    return Settings()

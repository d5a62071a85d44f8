"""Catalog Service Configuration"""

from typing import Optional
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Catalog Service"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8002

    # Deadline for a single product lookup, in seconds
    lookup_timeout: Optional[float] = 5.0


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()

"""Cart Service Configuration"""

from datetime import timedelta
from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_prefix="CART_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Cart Service"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8001

    # Key-value backend
    kv_backend: Literal["redis", "memory"] = "redis"
    redis_url: str = "redis://localhost:6379/0"
    cart_ttl_hours: int = 24
    store_timeout: Optional[float] = 5.0

    # Catalog Configuration
    catalog_base_url: Optional[str] = None
    catalog_timeout: float = 10.0

    # Used for added items when no catalog is configured
    placeholder_unit_price: float = 29.99
    placeholder_product_name: str = "Product Name"

    # Session used when a request carries no session id
    default_session_id: str = "default-session"

    @property
    def cart_ttl(self) -> timedelta:
        return timedelta(hours=self.cart_ttl_hours)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()

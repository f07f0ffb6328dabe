"""
Configuration management for the cart engine
"""

import threading
from decimal import Decimal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cartsync.infrastructure.utilities.constants import (
    CacheSettings,
    CartSettings,
    OwnerSettings,
    PricingSettings,
    RemoteSettings,
)


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Durable store
    database_url: str = Field(
        default="sqlite:///data/cartsync.db", description="Database connection URL"
    )

    # Remote cart service
    remote_base_url: str = Field(
        default=RemoteSettings.DEFAULT_BASE_URL, description="Base URL of the remote cart service"
    )
    remote_timeout_seconds: float = Field(
        default=RemoteSettings.DEFAULT_TIMEOUT_SECONDS, gt=0, description="HTTP timeout for remote calls"
    )
    remote_read_only: bool = Field(
        default=True, description="Remote service does not persist writes or deletes"
    )

    # Ownership
    owner_key_bound: int = Field(
        default=OwnerSettings.DEFAULT_OWNER_KEY_BOUND, ge=1, description="Upper bound of valid owner keys"
    )

    # Pricing
    currency: str = Field(default=PricingSettings.DEFAULT_CURRENCY, description="Currency code")
    fallback_unit_price: Decimal = Field(
        default=PricingSettings.FALLBACK_UNIT_PRICE, ge=0, description="Price used when the catalog has no quote"
    )
    fallback_title_template: str = Field(
        default=PricingSettings.FALLBACK_TITLE_TEMPLATE, description="Title used when the catalog has no quote"
    )
    fallback_thumbnail: str = Field(
        default=PricingSettings.FALLBACK_THUMBNAIL, description="Thumbnail used when the catalog has no quote"
    )
    catalog_cache_ttl_seconds: int = Field(
        default=CacheSettings.PRODUCT_QUOTE_TTL_SECONDS, ge=0, description="Product quote cache TTL"
    )

    # Carts
    local_cart_id_floor: int = Field(
        default=CartSettings.LOCAL_CART_ID_FLOOR, ge=0, description="Locally created cart ids start above this"
    )
    merge_policy: str = Field(
        default="local_wins", description="local_wins, remote_wins or most_recent"
    )

    # Application settings
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: str = Field(default="", description="JSON log file path, empty to disable")
    environment: str = Field(default="development", description="Application environment")

    @field_validator("currency")
    @classmethod
    def _validate_currency(cls, value: str) -> str:
        if len(value) != 3:
            raise ValueError("Currency must be a 3-letter code")
        return value.upper()

    @field_validator("merge_policy")
    @classmethod
    def _validate_merge_policy(cls, value: str) -> str:
        value = value.lower()
        if value not in {"local_wins", "remote_wins", "most_recent"}:
            raise ValueError(f"Unknown merge policy: {value}")
        return value


_settings_instance: Settings | None = None
_settings_lock = threading.Lock()


def get_config() -> Settings:
    """Get the global settings instance, ensuring thread safety."""
    global _settings_instance
    if _settings_instance is None:
        with _settings_lock:
            if _settings_instance is None:
                _settings_instance = Settings()
    return _settings_instance


def reset_config() -> None:
    """Drop the cached settings so the next get_config() re-reads the environment"""
    global _settings_instance
    with _settings_lock:
        _settings_instance = None

"""
Configuration management for the OCI Pricing MCP Server.

Loads configuration from environment variables (and an optional .env file)
and provides typed configuration objects.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


_SETTINGS = SettingsConfigDict(
    env_file=".env",
    case_sensitive=False,
    populate_by_name=True,
    extra="ignore",
)


class AppConfig(BaseSettings):
    """Application configuration"""
    name: str = Field(default="oci-pricing", alias="APP_NAME")
    version: str = Field(default="1.0.0", alias="APP_VERSION")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=True, alias="LOG_JSON")

    model_config = _SETTINGS


class PricingConfig(BaseSettings):
    """Pricing catalog, cache and real-time feed configuration"""
    data_file: str = Field(default="", alias="PRICING_DATA_FILE")

    # TTLs are in minutes
    cache_ttl_minutes: float = Field(default=60, alias="PRICING_CACHE_TTL_MINUTES")
    catalog_ttl_minutes: float = Field(default=24 * 60, alias="PRICING_CATALOG_TTL_MINUTES")
    realtime_ttl_minutes: float = Field(default=5, alias="PRICING_REALTIME_TTL_MINUTES")

    realtime_api_url: str = Field(
        default="https://apexapps.oracle.com/pls/apex/cetools/api/v1/products/",
        alias="PRICING_REALTIME_API_URL"
    )
    realtime_timeout_seconds: float = Field(default=30.0, alias="PRICING_REALTIME_TIMEOUT_SECONDS")

    default_region: str = Field(default="us-ashburn-1", alias="PRICING_DEFAULT_REGION")
    default_currency: str = Field(default="USD", alias="PRICING_DEFAULT_CURRENCY")

    model_config = _SETTINGS

    @property
    def data_path(self) -> Optional[Path]:
        """Explicit catalog path, or None to use the bundled catalog"""
        return Path(self.data_file).expanduser() if self.data_file else None


class Config:
    """Main configuration container"""

    def __init__(self):
        """Initialize all configuration sections"""
        self.app = AppConfig()
        self.pricing = PricingConfig()


# Global configuration instance
config = Config()

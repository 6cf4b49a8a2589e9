"""Utils package initialization"""

from oci_pricing_mcp.utils.config import config, Config, AppConfig, PricingConfig
from oci_pricing_mcp.utils.logger import logger, setup_logger

__all__ = [
    "config",
    "Config",
    "AppConfig",
    "PricingConfig",
    "logger",
    "setup_logger",
]

"""Pricing data access: cache, bundled catalog loader and live price list"""

from oci_pricing_mcp.data.cache import CacheKeys, PricingCache
from oci_pricing_mcp.data.loader import BUNDLED_DATA_FILE, PricingDataError, PricingDataLoader
from oci_pricing_mcp.data.realtime import RealTimePricingClient, RealTimePricingError

__all__ = [
    "CacheKeys",
    "PricingCache",
    "BUNDLED_DATA_FILE",
    "PricingDataError",
    "PricingDataLoader",
    "RealTimePricingClient",
    "RealTimePricingError",
]

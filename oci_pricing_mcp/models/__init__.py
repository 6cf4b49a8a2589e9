"""Catalog and estimate models"""

from oci_pricing_mcp.models.estimate import (
    HOURS_PER_MONTH,
    CostEstimate,
    CostEstimateInput,
    LineItem,
    PriceStatus,
    round2,
)
from oci_pricing_mcp.models.pricing import (
    APIProduct,
    PricingCatalog,
    PricingItem,
    SERVICE_CATEGORIES,
)

__all__ = [
    "HOURS_PER_MONTH",
    "CostEstimate",
    "CostEstimateInput",
    "LineItem",
    "PriceStatus",
    "round2",
    "APIProduct",
    "PricingCatalog",
    "PricingItem",
    "SERVICE_CATEGORIES",
]

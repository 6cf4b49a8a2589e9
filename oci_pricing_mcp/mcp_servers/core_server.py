"""
MCP Server: core pricing lookups.

Catalog lookups by category, the service and region catalogs, the bundled
product list, the live price list and server diagnostics.
"""
from typing import Any, Dict, List, Optional

from oci_pricing_mcp.data.realtime import RealTimePricingClient
from oci_pricing_mcp.mcp_servers.base import BasePricingServer, group_by_type
from oci_pricing_mcp.models.pricing import PricingItem
from oci_pricing_mcp.utils.config import config

PRICE_LIST_URL = "https://www.oracle.com/cloud/price-list/"
REGION_PRICING_NOTE = (
    "OCI pricing is consistent across all commercial regions. "
    "Government and sovereign regions may vary."
)
MAX_REALTIME_ITEMS = 200


class CoreServer(BasePricingServer):
    SERVER_NAME = "core"
    VERSION = "1.0.0"

    def __init__(self, loader, realtime: Optional[RealTimePricingClient] = None):
        super().__init__(loader)
        self.realtime = realtime
        self.peers: List[BasePricingServer] = []

    def _category_items(self, service: str) -> List[PricingItem]:
        getters = {
            "compute": self.loader.get_compute_pricing,
            "storage": self.loader.get_storage_pricing,
            "database": self.loader.get_database_pricing,
            "networking": self.loader.get_networking_pricing,
            "kubernetes": self.loader.get_kubernetes_pricing,
        }
        getter = getters.get(service)
        if getter is None:
            raise ValueError(f"Unknown service: {service}. Valid services: {', '.join(getters)}")
        return getter()

    def get_pricing(
        self,
        service: str,
        type: Optional[str] = None,
        region: Optional[str] = None,
    ) -> Dict[str, Any]:
        items = self._category_items(service)
        if type:
            items = [i for i in items if i.matches(type)]
        return {
            "service": service,
            "type": type,
            "region": region or "all (OCI has consistent global pricing)",
            "items": [i.to_dict() for i in items],
            "total_count": len(items),
            "by_type": group_by_type(items),
            "note": REGION_PRICING_NOTE,
            "last_updated": self.loader.get_last_updated(),
        }

    def list_services(self, category: Optional[str] = None) -> Dict[str, Any]:
        catalog = self.loader.get_services_catalog()
        services = [s for s in catalog if not category or s.category == category]
        return {
            "services": [s.model_dump() for s in services],
            "categories": list(dict.fromkeys(s.category for s in catalog)),
            "total_count": len(services),
            "last_updated": self.loader.get_last_updated(),
        }

    def compare_regions(self, service: str, type: str) -> Dict[str, Any]:
        regions = self.loader.get_regions()
        items = [i for i in self._category_items(service) if i.matches(type)]
        region_list = [r.model_dump() for r in regions]
        if not items:
            return {
                "result": None,
                "regions": region_list,
                "note": f"No pricing found for {service}/{type}",
                "last_updated": self.loader.get_last_updated(),
            }

        item = items[0]
        commercial = [r for r in regions if r.type == "commercial"]
        region_pricing = [
            {"region": r.name, "location": r.location, "price_per_unit": item.price_per_unit, "unit": item.unit}
            for r in commercial
        ]
        first = region_pricing[0]["region"] if region_pricing else None
        return {
            "result": {
                "service": item.service,
                "type": item.type,
                "description": item.description,
                "regions": region_pricing,
                "cheapest_region": first,
                "most_expensive_region": first,
                "price_difference_percent": 0,
            },
            "regions": region_list,
            "note": "OCI maintains consistent pricing across all commercial regions. "
                    "This is different from AWS/Azure/GCP where prices vary by region.",
            "last_updated": self.loader.get_last_updated(),
        }

    def list_regions(self) -> Dict[str, Any]:
        regions = self.loader.get_regions()
        by_type: Dict[str, int] = {}
        for r in regions:
            by_type[r.type] = by_type.get(r.type, 0) + 1
        return {
            "regions": [r.model_dump() for r in regions],
            "commercial_count": by_type.get("commercial", 0),
            "counts_by_type": by_type,
            "total_count": len(regions),
            "default_region": config.pricing.default_region,
        }

    def get_free_tier(self) -> Dict[str, Any]:
        free_tier = self.loader.get_free_tier()
        free_tier.setdefault("last_updated", self.loader.get_last_updated())
        return free_tier

    def get_pricing_info(self) -> Dict[str, Any]:
        metadata = self.loader.get_metadata()
        return {
            "server": config.app.name,
            "version": config.app.version,
            "source": metadata.source,
            "source_url": metadata.source_url or PRICE_LIST_URL,
            "pricing_model": metadata.pricing_model,
            "currency": metadata.currency,
            "last_updated": metadata.last_updated,
            "data_file": str(self.loader.data_file),
            "counts": self.loader.get_category_counts(),
            "total_products": len(self.loader.get_all_products()),
            "cache": self.loader.cache.stats(),
            "realtime_api_url": self.realtime.api_url if self.realtime else None,
            "note": "OCI maintains consistent pricing across all commercial regions globally.",
        }

    def search_products(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Dict[str, Any]:
        products = self.loader.search_products(category, search)
        return {
            "products": [p.to_dict() for p in products],
            "total_count": len(products),
            "filters": {"category": category or "all", "search": search},
            "categories": self.loader.get_categories(),
            "last_updated": self.loader.get_last_updated(),
        }

    def _require_realtime(self) -> RealTimePricingClient:
        if self.realtime is None:
            raise RuntimeError("Real-time pricing is not configured")
        return self.realtime

    async def get_realtime_pricing(
        self,
        currency: Optional[str] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Dict[str, Any]:
        feed = await self._require_realtime().fetch(currency, category, search)
        items = feed["items"]
        result = {
            "source": "Oracle Cloud price list API (real-time)",
            "last_updated": feed["last_updated"],
            "currency": feed["currency"],
            "total_products": feed["total_products"],
            "items": [p.to_dict() for p in items[:MAX_REALTIME_ITEMS]],
        }
        if len(items) > MAX_REALTIME_ITEMS:
            result["note"] = (
                f"Showing first {MAX_REALTIME_ITEMS} of {len(items)} products; "
                f"narrow the results with category or search."
            )
        return result

    async def list_realtime_categories(self, currency: Optional[str] = None) -> Dict[str, Any]:
        realtime = self._require_realtime()
        currency = realtime.resolve_currency(currency)
        categories = await realtime.list_categories(currency)
        return {
            "categories": categories,
            "total_count": len(categories),
            "currency": currency,
        }

    def refresh_pricing_data(self) -> Dict[str, Any]:
        summary = self.loader.refresh_cache()
        summary["message"] = "Pricing catalog reloaded from disk"
        return summary

    def get_server_health(self) -> Dict[str, Any]:
        servers = [self] + [p for p in self.peers if p is not self]
        metrics = [s.get_health_metrics() for s in servers]
        return {
            "status": "healthy",
            "version": config.app.version,
            "servers": metrics,
            "total_calls": sum(m["total_calls"] for m in metrics),
            "cache": self.loader.cache.stats(),
            "catalog_last_updated": self.loader.get_last_updated(),
        }

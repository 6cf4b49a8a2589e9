"""MCP Server: block, object, file and archive storage pricing."""
from typing import Any, Dict, List, Optional

from oci_pricing_mcp.mcp_servers.base import BasePricingServer, group_by_type
from oci_pricing_mcp.models.estimate import CostEstimate, LineItem, round2
from oci_pricing_mcp.models.pricing import StoragePricing

# ── Tier -> catalog type ─────────────────────────────────────────────────────

BLOCK_TIERS = {
    "basic": "block-storage-basic",
    "balanced": "block-storage-balanced",
    "high": "block-storage-high-performance",
    "ultra": "block-storage-ultra-high",
}
OBJECT_TIERS = {
    "standard": "object-storage",
    "infrequent": "object-storage-ia",
    "archive": "object-storage-archive",
}
FILE_STORAGE = "file-storage"

TIER_USE_CASES = {
    "block-storage-basic": "Throughput-oriented sequential workloads, cold boot volumes",
    "block-storage-balanced": "Default choice for boot volumes and most application data",
    "block-storage-high-performance": "Transactional databases and I/O intensive workloads",
    "block-storage-ultra-high": "Latency-critical databases needing maximum IOPS",
    "object-storage": "Frequently accessed unstructured data, static web content, data lakes",
    "object-storage-ia": "Backups and data read less than once a month (31-day minimum)",
    "object-storage-archive": "Long-term retention and compliance archives (90-day minimum)",
    "file-storage": "Shared POSIX file systems for applications and home directories",
}


class StorageServer(BasePricingServer):
    SERVER_NAME = "storage"
    VERSION = "1.0.0"

    def _by_type(self) -> Dict[str, StoragePricing]:
        return {s.type: s for s in self.loader.get_storage_pricing()}

    def list_storage_options(self, type: Optional[str] = None) -> Dict[str, Any]:
        items = self.loader.get_storage_pricing()
        if type:
            items = [s for s in items if s.storage_type == type.lower() or s.matches(type)]
        return {
            "options": [s.to_dict() for s in items],
            "total_count": len(items),
            "by_type": group_by_type(items),
            "free_tier_note": self._free_tier_note(),
            "notes": [
                "Block Volume performance is set in Volume Performance Units (VPUs) per GB",
                "Object Storage Infrequent Access has a 31-day minimum retention",
                "Archive Storage has a 90-day minimum retention and restores take up to an hour",
            ],
            "last_updated": self.loader.get_last_updated(),
        }

    def _free_tier_note(self) -> str:
        storage = self.loader.get_free_tier().get("storage") or {}
        parts = [v for v in (storage.get("block"), storage.get("object")) if v]
        return "Always Free: " + "; ".join(parts) if parts else "Always Free tier available"

    def estimate_storage(
        self,
        block_volume_gb: float = 0,
        block_performance_tier: str = "balanced",
        object_storage_gb: float = 0,
        object_storage_tier: str = "standard",
        file_storage_gb: float = 0,
        archive_storage_gb: float = 0,
    ) -> CostEstimate:
        catalog = self._by_type()
        estimate = CostEstimate()
        requests = [
            (BLOCK_TIERS.get(block_performance_tier), block_volume_gb),
            (OBJECT_TIERS.get(object_storage_tier), object_storage_gb),
            (OBJECT_TIERS["archive"], archive_storage_gb),
            (FILE_STORAGE, file_storage_gb),
        ]
        for storage_type, gb in requests:
            if gb <= 0:
                continue
            item = catalog.get(storage_type) if storage_type else None
            if item is None:
                estimate.notes.append(f"Warning: storage type {storage_type!r} not found in catalog.")
                continue
            estimate.add(LineItem.build("storage", item.description, gb, item.unit, item.price_per_unit))
            if item.min_retention_days:
                estimate.notes.append(
                    f"{item.description} has a {item.min_retention_days}-day minimum retention period."
                )
        return estimate

    def calculate_storage_cost(
        self,
        block_volume_gb: float = 0,
        block_performance_tier: str = "balanced",
        object_storage_gb: float = 0,
        object_storage_tier: str = "standard",
        file_storage_gb: float = 0,
    ) -> Dict[str, Any]:
        estimate = self.estimate_storage(
            block_volume_gb, block_performance_tier, object_storage_gb, object_storage_tier, file_storage_gb
        )
        estimate.notes.append(f"{self._free_tier_note()}.")
        return estimate.to_dict()

    def compare_storage_tiers(self, size_gb: float) -> Dict[str, Any]:
        tiers: List[Dict[str, Any]] = []
        for item in self.loader.get_storage_pricing():
            if item.type not in TIER_USE_CASES:
                continue
            tiers.append({
                "type": item.type,
                "description": item.description,
                "price_per_gb": item.price_per_unit,
                "monthly_total": round2(item.price_per_unit * size_gb),
                "use_case": TIER_USE_CASES[item.type],
            })
        tiers.sort(key=lambda t: t["monthly_total"])
        return {
            "size_gb": size_gb,
            "tiers": tiers,
            "cheapest": tiers[0]["type"] if tiers else None,
            "notes": [
                "Archive and Infrequent Access tiers carry retrieval fees and minimum retention",
                "Block Volume tiers differ only in VPUs; the capacity price is the same",
            ],
            "last_updated": self.loader.get_last_updated(),
        }

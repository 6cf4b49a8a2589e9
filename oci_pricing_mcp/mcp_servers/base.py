"""Shared plumbing for the category pricing servers."""
from collections import OrderedDict
from typing import Any, Dict, Iterable, List, Optional

from oci_pricing_mcp.data.loader import PricingDataLoader
from oci_pricing_mcp.models.estimate import HOURS_PER_MONTH


class BasePricingServer:
    SERVER_NAME = "base"
    VERSION = "1.0.0"

    def __init__(self, loader: PricingDataLoader):
        self.loader = loader
        self._call_count = 0
        self._success_count = 0
        self._total_latency_ms = 0.0

    def _record_call(self, latency_ms: float, success: bool = True):
        self._call_count += 1
        if success: self._success_count += 1
        self._total_latency_ms += latency_ms

    def get_health_metrics(self) -> Dict[str, Any]:
        calls = max(self._call_count, 1)
        return {
            "server": self.SERVER_NAME,
            "version": self.VERSION,
            "total_calls": self._call_count,
            "success_rate": round(self._success_count / calls, 3) if self._call_count else 1.0,
            "avg_latency_ms": round(self._total_latency_ms / calls, 2),
            "status": "healthy",
        }


def group_by_type(items: Iterable[Any], limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """Group catalog items by their type, preserving first-seen order."""
    groups: "OrderedDict[str, List[Any]]" = OrderedDict()
    for item in items:
        groups.setdefault(item.type, []).append(item)
    return [
        {"type": t, "count": len(members), "items": [m.to_dict() for m in members[:limit]]}
        for t, members in groups.items()
    ]


def unique_types(items: Iterable[Any]) -> List[str]:
    return list(OrderedDict.fromkeys(i.type for i in items))


def hours_note(hours_per_month: float, what: str = "Compute") -> Optional[str]:
    if hours_per_month < HOURS_PER_MONTH:
        return f"{what} calculated for {hours_per_month:g} hours/month (not 24/7)."
    return None

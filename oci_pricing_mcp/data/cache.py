"""In-memory time-to-live cache for pricing data."""
import time
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel

from oci_pricing_mcp.utils.logger import log_cache_event


class CacheKeys:
    PRICING_DATA = "oci_pricing_data"
    REALTIME_PREFIX = "realtime_"

    @staticmethod
    def realtime(currency: str) -> str:
        return f"{CacheKeys.REALTIME_PREFIX}{currency.upper()}"


class CacheEntry(BaseModel):
    value: Any
    created_at: float
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


class PricingCache:
    """
    Keyed values with a per-entry expiry.

    There is no capacity bound: the key space is one catalog key plus one
    key per real-time currency. Expired entries are removed when read.
    """

    def __init__(self, default_ttl_minutes: float = 60, clock: Callable[[], float] = time.time):
        self.default_ttl_minutes = default_ttl_minutes
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            log_cache_event("miss", key)
            return None
        if entry.is_expired(self._clock()):
            del self._entries[key]
            log_cache_event("expired", key)
            return None
        log_cache_event("hit", key)
        return entry.value

    def set(self, key: str, value: Any, ttl_minutes: Optional[float] = None) -> None:
        ttl = self.default_ttl_minutes if ttl_minutes is None else ttl_minutes
        now = self._clock()
        self._entries[key] = CacheEntry(value=value, created_at=now, expires_at=now + ttl * 60)
        log_cache_event("set", key)

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def _sweep(self) -> None:
        now = self._clock()
        for key in [k for k, e in self._entries.items() if e.is_expired(now)]:
            del self._entries[key]

    def stats(self) -> Dict[str, Any]:
        self._sweep()
        keys: List[str] = list(self._entries)
        return {"size": len(keys), "keys": keys}

"""
Oracle price list API client.
Uses the public cetools products endpoint (no authentication required).
"""
import json
import time
from typing import Any, Dict, List, Optional

import httpx

from oci_pricing_mcp.data.cache import CacheKeys, PricingCache
from oci_pricing_mcp.models.pricing import APIProduct
from oci_pricing_mcp.utils.config import config
from oci_pricing_mcp.utils.logger import log_fetch, logger

DEFAULT_API_URL = "https://apexapps.oracle.com/pls/apex/cetools/api/v1/products/"
PAY_AS_YOU_GO = "PAY_AS_YOU_GO"


class RealTimePricingError(Exception):
    """Raised when the live price list cannot be fetched."""
    pass


def _pay_as_you_go_price(item: Dict[str, Any], currency: str) -> float:
    for localization in item.get("currencyCodeLocalizations") or []:
        if localization.get("currencyCode") != currency:
            continue
        for price in localization.get("prices") or []:
            if price.get("model") == PAY_AS_YOU_GO:
                return float(price.get("value") or 0)
    return 0.0


def normalize_product(item: Dict[str, Any], currency: str) -> APIProduct:
    """Map one raw price-list item onto the normalized product shape."""
    display_name = item.get("displayName") or ""
    return APIProduct(
        part_number=item.get("partNumber") or "",
        display_name=display_name,
        metric_name=item.get("metricName") or "",
        service_category=item.get("serviceCategory") or "",
        unit_price=_pay_as_you_go_price(item, currency),
        currency=currency,
        byol="byol" in display_name.lower(),
    )


class RealTimePricingClient:
    """Client for the live OCI price list, cached per currency."""

    def __init__(
        self,
        cache: PricingCache,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        ttl_minutes: float = 5,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        default_currency: Optional[str] = None,
    ):
        self.cache = cache
        self.api_url = api_url
        self.timeout = timeout
        self.ttl_minutes = ttl_minutes
        self.default_currency = (default_currency or config.pricing.default_currency).upper()
        self._transport = transport

    def resolve_currency(self, currency: Optional[str] = None) -> str:
        return currency.upper() if currency else self.default_currency

    async def _fetch_feed(self, currency: str) -> Dict[str, Any]:
        key = CacheKeys.realtime(currency)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        start = time.time()
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.get(self.api_url, params={"currencyCode": currency})
                response.raise_for_status()
                data = response.json()
            if not isinstance(data, dict):
                raise RealTimePricingError("Failed to fetch real-time pricing: unexpected response document")
            items = [normalize_product(i, currency) for i in data.get("items") or []]
        except httpx.HTTPStatusError as error:
            log_fetch(self.api_url, currency, f"http_{error.response.status_code}", (time.time() - start) * 1000)
            raise RealTimePricingError(
                f"Failed to fetch real-time pricing: HTTP {error.response.status_code}"
            ) from error
        except httpx.RequestError as error:
            log_fetch(self.api_url, currency, "request_error", (time.time() - start) * 1000)
            raise RealTimePricingError(f"Failed to fetch real-time pricing: {error}") from error
        except json.JSONDecodeError as error:
            log_fetch(self.api_url, currency, "invalid_json", (time.time() - start) * 1000)
            raise RealTimePricingError(f"Failed to fetch real-time pricing: invalid JSON ({error})") from error
        except (TypeError, ValueError, AttributeError) as error:
            log_fetch(self.api_url, currency, "malformed_item", (time.time() - start) * 1000)
            raise RealTimePricingError(f"Failed to fetch real-time pricing: malformed product entry ({error})") from error

        feed = {
            "last_updated": data.get("lastUpdated") or "",
            "currency": currency,
            "items": items,
        }
        self.cache.set(key, feed, self.ttl_minutes)
        log_fetch(self.api_url, currency, "ok", (time.time() - start) * 1000, len(items))
        return feed

    async def fetch(
        self,
        currency: Optional[str] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Fetch the live price list and filter it.

        Args:
            currency: ISO currency code of the price to extract; defaults to PRICING_DEFAULT_CURRENCY
            category: Optional service category substring
            search: Optional substring over display name, part number and category

        Returns:
            Dict with last_updated, currency, total_products and items

        Raises:
            RealTimePricingError: If the request fails or returns a non-2xx status
        """
        currency = self.resolve_currency(currency)
        feed = await self._fetch_feed(currency)
        items: List[APIProduct] = feed["items"]
        if category:
            items = [p for p in items if p.in_category(category)]
        if search:
            items = [p for p in items if p.matches(search)]
        logger.debug(f"Real-time pricing filtered to {len(items)} items")
        return {
            "last_updated": feed["last_updated"],
            "currency": currency,
            "total_products": len(items),
            "items": items,
        }

    async def list_categories(self, currency: Optional[str] = None) -> List[str]:
        feed = await self._fetch_feed(self.resolve_currency(currency))
        return sorted({p.service_category for p in feed["items"] if p.service_category})

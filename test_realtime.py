"""Tests for the live Oracle price list client (HTTP faked with httpx.MockTransport)."""

import unittest

import httpx


FEED = {
    "lastUpdated": "2026-10-01T08:00:00Z",
    "items": [
        {
            "partNumber": "B97384",
            "displayName": "Compute - Standard - E5 - OCPU",
            "metricName": "OCPU Per Hour",
            "serviceCategory": "Compute - Virtual Machine",
            "currencyCodeLocalizations": [
                {"currencyCode": "USD", "prices": [
                    {"model": "PAY_AS_YOU_GO", "value": 0.03},
                    {"model": "ANNUAL_COMMIT", "value": 0.025},
                ]},
                {"currencyCode": "EUR", "prices": [{"model": "PAY_AS_YOU_GO", "value": 0.028}]},
            ],
        },
        {
            "partNumber": "B95701",
            "displayName": "Oracle Autonomous Transaction Processing - ECPU - BYOL",
            "metricName": "ECPU Per Hour",
            "serviceCategory": "Database - Autonomous",
            "currencyCodeLocalizations": [
                {"currencyCode": "USD", "prices": [{"model": "PAY_AS_YOU_GO", "value": 0.0807}]},
            ],
        },
        {
            "partNumber": "B91628",
            "displayName": "Object Storage - Storage",
            "metricName": "Gigabyte Storage Capacity Per Month",
            "serviceCategory": "Storage - Object Storage",
            "currencyCodeLocalizations": [],
        },
    ],
}


class RecordingTransport:
    """MockTransport handler that counts requests and returns a fixed response."""

    def __init__(self, status_code=200, payload=None, exc=None):
        self.status_code = status_code
        self.payload = FEED if payload is None else payload
        self.exc = exc
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return httpx.Response(self.status_code, json=self.payload)


def make_client(handler, clock=None, default_currency=None):
    from oci_pricing_mcp.data.cache import PricingCache
    from oci_pricing_mcp.data.realtime import RealTimePricingClient
    cache = PricingCache(clock=clock) if clock else PricingCache()
    return RealTimePricingClient(
        cache=cache,
        api_url="https://prices.example.test/products/",
        transport=httpx.MockTransport(handler),
        default_currency=default_currency,
    )


class TestNormalizeProduct(unittest.TestCase):

    def test_pay_as_you_go_price_for_currency(self):
        from oci_pricing_mcp.data.realtime import normalize_product
        usd = normalize_product(FEED["items"][0], "USD")
        eur = normalize_product(FEED["items"][0], "EUR")
        self.assertEqual(usd.unit_price, 0.03)
        self.assertEqual(eur.unit_price, 0.028)
        self.assertEqual(usd.part_number, "B97384")
        self.assertFalse(usd.byol)

    def test_byol_flagged_from_display_name(self):
        from oci_pricing_mcp.data.realtime import normalize_product
        self.assertTrue(normalize_product(FEED["items"][1], "USD").byol)

    def test_missing_currency_prices_zero(self):
        from oci_pricing_mcp.data.realtime import normalize_product
        self.assertEqual(normalize_product(FEED["items"][2], "USD").unit_price, 0.0)
        self.assertEqual(normalize_product(FEED["items"][1], "JPY").unit_price, 0.0)


class TestRealTimePricingClient(unittest.IsolatedAsyncioTestCase):

    async def test_fetch_returns_normalized_items(self):
        transport = RecordingTransport()
        client = make_client(transport)
        result = await client.fetch("usd")
        self.assertEqual(result["currency"], "USD")
        self.assertEqual(result["last_updated"], "2026-10-01T08:00:00Z")
        self.assertEqual(result["total_products"], 3)
        self.assertEqual(transport.requests[0].url.params["currencyCode"], "USD")

    async def test_filters(self):
        client = make_client(RecordingTransport())
        storage = await client.fetch(category="storage")
        self.assertEqual([p.part_number for p in storage["items"]], ["B91628"])
        byol = await client.fetch(search="byol")
        self.assertEqual([p.part_number for p in byol["items"]], ["B95701"])

    async def test_second_call_within_ttl_is_cached(self):
        transport = RecordingTransport()
        client = make_client(transport)
        await client.fetch("USD")
        await client.fetch("USD", category="compute")
        await client.list_categories("USD")
        self.assertEqual(len(transport.requests), 1)

    async def test_cache_is_per_currency(self):
        transport = RecordingTransport()
        client = make_client(transport)
        await client.fetch("USD")
        await client.fetch("EUR")
        self.assertEqual(len(transport.requests), 2)

    async def test_refetch_after_ttl(self):
        now = [0.0]
        transport = RecordingTransport()
        client = make_client(transport, clock=lambda: now[0])
        await client.fetch("USD")
        now[0] += 6 * 60
        await client.fetch("USD")
        self.assertEqual(len(transport.requests), 2)

    async def test_list_categories_sorted_unique(self):
        client = make_client(RecordingTransport())
        categories = await client.list_categories()
        self.assertEqual(categories, [
            "Compute - Virtual Machine",
            "Database - Autonomous",
            "Storage - Object Storage",
        ])

    async def test_http_error_raises(self):
        from oci_pricing_mcp.data.realtime import RealTimePricingError
        client = make_client(RecordingTransport(status_code=503, payload={}))
        with self.assertRaises(RealTimePricingError) as ctx:
            await client.fetch()
        self.assertIn("HTTP 503", str(ctx.exception))

    async def test_transport_error_raises(self):
        from oci_pricing_mcp.data.realtime import RealTimePricingError
        client = make_client(RecordingTransport(exc=httpx.ConnectError("connection refused")))
        with self.assertRaises(RealTimePricingError):
            await client.fetch()

    async def test_failed_fetch_not_cached(self):
        from oci_pricing_mcp.data.realtime import RealTimePricingError
        transport = RecordingTransport(status_code=500, payload={})
        client = make_client(transport)
        with self.assertRaises(RealTimePricingError):
            await client.fetch()
        transport.status_code = 200
        transport.payload = FEED
        result = await client.fetch()
        self.assertEqual(result["total_products"], 3)

    async def test_non_object_body_raises(self):
        from oci_pricing_mcp.data.realtime import RealTimePricingError
        client = make_client(RecordingTransport(payload=["not", "an", "object"]))
        with self.assertRaises(RealTimePricingError):
            await client.fetch()

    async def test_default_currency_from_config(self):
        from oci_pricing_mcp.utils.config import config
        transport = RecordingTransport()
        client = make_client(transport)
        result = await client.fetch()
        self.assertEqual(result["currency"], config.pricing.default_currency.upper())
        self.assertEqual(transport.requests[0].url.params["currencyCode"], config.pricing.default_currency.upper())

    async def test_configured_default_currency_used_when_omitted(self):
        transport = RecordingTransport()
        client = make_client(transport, default_currency="eur")
        result = await client.fetch()
        self.assertEqual(result["currency"], "EUR")
        self.assertEqual(result["items"][0].unit_price, 0.028)
        await client.list_categories()
        self.assertEqual([r.url.params["currencyCode"] for r in transport.requests], ["EUR"])

    async def test_malformed_price_value_raises(self):
        from oci_pricing_mcp.data.realtime import RealTimePricingError
        item = dict(FEED["items"][0], currencyCodeLocalizations=[
            {"currencyCode": "USD", "prices": [{"model": "PAY_AS_YOU_GO", "value": "abc"}]},
        ])
        client = make_client(RecordingTransport(payload={"items": [item]}))
        with self.assertRaises(RealTimePricingError) as ctx:
            await client.fetch("USD")
        self.assertIn("Failed to fetch real-time pricing", str(ctx.exception))

    async def test_malformed_item_shape_raises_and_is_not_cached(self):
        from oci_pricing_mcp.data.cache import CacheKeys
        from oci_pricing_mcp.data.realtime import RealTimePricingError
        client = make_client(RecordingTransport(payload={"items": ["B97384"]}))
        with self.assertRaises(RealTimePricingError):
            await client.fetch("USD")
        with self.assertRaises(RealTimePricingError):
            await client.list_categories("USD")
        self.assertFalse(client.cache.has(CacheKeys.realtime("USD")))


if __name__ == "__main__":
    unittest.main(verbosity=2)

"""Tests for the in-memory TTL pricing cache."""

import unittest


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, minutes: float) -> None:
        self.now += minutes * 60


class TestPricingCache(unittest.TestCase):

    def setUp(self):
        from oci_pricing_mcp.data.cache import PricingCache
        self.clock = FakeClock()
        self.cache = PricingCache(default_ttl_minutes=60, clock=self.clock)

    def test_set_then_get(self):
        self.cache.set("k", {"a": 1})
        self.assertEqual(self.cache.get("k"), {"a": 1})
        self.assertTrue(self.cache.has("k"))

    def test_missing_key_is_none(self):
        self.assertIsNone(self.cache.get("nope"))
        self.assertFalse(self.cache.has("nope"))

    def test_entry_expires_after_ttl(self):
        self.cache.set("k", "v", ttl_minutes=1)
        self.clock.advance(0.5)
        self.assertEqual(self.cache.get("k"), "v")
        self.clock.advance(0.6)
        self.assertIsNone(self.cache.get("k"))
        self.assertEqual(self.cache.stats()["size"], 0)

    def test_entry_at_exact_expiry_is_still_valid(self):
        self.cache.set("k", "v", ttl_minutes=1)
        self.clock.advance(1)
        self.assertEqual(self.cache.get("k"), "v")

    def test_default_ttl_used(self):
        self.cache.set("k", "v")
        self.clock.advance(59)
        self.assertEqual(self.cache.get("k"), "v")
        self.clock.advance(2)
        self.assertIsNone(self.cache.get("k"))

    def test_set_overwrites_and_resets_expiry(self):
        self.cache.set("k", "old", ttl_minutes=1)
        self.clock.advance(0.9)
        self.cache.set("k", "new", ttl_minutes=1)
        self.clock.advance(0.9)
        self.assertEqual(self.cache.get("k"), "new")

    def test_delete_and_clear(self):
        self.cache.set("a", 1)
        self.cache.set("b", 2)
        self.assertTrue(self.cache.delete("a"))
        self.assertFalse(self.cache.delete("a"))
        self.assertIsNone(self.cache.get("a"))
        self.cache.clear()
        self.assertEqual(self.cache.stats(), {"size": 0, "keys": []})

    def test_stats_sweeps_expired_entries(self):
        self.cache.set("short", 1, ttl_minutes=1)
        self.cache.set("long", 2, ttl_minutes=10)
        self.clock.advance(5)
        stats = self.cache.stats()
        self.assertEqual(stats["size"], 1)
        self.assertEqual(stats["keys"], ["long"])

    def test_realtime_keys_are_per_currency(self):
        from oci_pricing_mcp.data.cache import CacheKeys
        self.assertEqual(CacheKeys.realtime("eur"), "realtime_EUR")
        self.assertNotEqual(CacheKeys.realtime("USD"), CacheKeys.realtime("GBP"))
        self.assertNotEqual(CacheKeys.realtime("USD"), CacheKeys.PRICING_DATA)


class TestCacheEntry(unittest.TestCase):

    def test_entry_validates_timestamps_and_keeps_value_identity(self):
        from pydantic import ValidationError
        from oci_pricing_mcp.data.cache import CacheEntry
        value = {"items": []}
        entry = CacheEntry(value=value, created_at=0, expires_at=60)
        self.assertIs(entry.value, value)
        self.assertFalse(entry.is_expired(60))
        self.assertTrue(entry.is_expired(61))
        with self.assertRaises(ValidationError):
            CacheEntry(value=value, created_at="later", expires_at=60)


if __name__ == "__main__":
    unittest.main(verbosity=2)

"""Tests for the TTL cache."""
from __future__ import annotations

from unittest.mock import patch

from sl_mcp.infrastructure.cache import TTLCache
from tests.factories import FakeClock


def test_cache_miss_returns_none() -> None:
    cache = TTLCache()
    assert cache.get("absent") is None


def test_put_and_get() -> None:
    cache = TTLCache()
    cache.put("mykey", {"StatusCode": 0})
    assert cache.get("mykey") == {"StatusCode": 0}


def test_value_returned_unchanged_before_ttl(fake_clock: FakeClock) -> None:
    cache = TTLCache(clock=fake_clock)
    payload = {"ResponseData": {"Buses": []}}
    cache.put("k", payload, ttl=600)
    fake_clock.advance(599)
    assert cache.get("k") is payload


def test_cache_expires_at_ttl(fake_clock: FakeClock) -> None:
    cache = TTLCache(clock=fake_clock)
    cache.put("k", "v", ttl=600)
    fake_clock.advance(600)
    assert cache.get("k") is None


def test_cache_default_ttl(fake_clock: FakeClock) -> None:
    cache = TTLCache(default_ttl=90, clock=fake_clock)
    cache.put("k", "v")
    fake_clock.advance(89)
    assert cache.get("k") == "v"
    fake_clock.advance(2)
    assert cache.get("k") is None


def test_cache_custom_ttl(fake_clock: FakeClock) -> None:
    """Entry with ttl=300 is still live after 91 seconds (default TTL would have expired)."""
    cache = TTLCache(default_ttl=90, clock=fake_clock)
    cache.put("k", "v", ttl=300)
    fake_clock.advance(91)
    assert cache.get("k") == "v"


def test_cache_uses_monotonic_by_default() -> None:
    with patch("sl_mcp.infrastructure.cache.time") as mock_time:
        mock_time.monotonic.return_value = 1000.0
        cache = TTLCache(default_ttl=90)
        cache.put("k", "v")
        mock_time.monotonic.return_value = 1091.0
        assert cache.get("k") is None


def test_cache_put_overwrites_and_resets_expiry(fake_clock: FakeClock) -> None:
    cache = TTLCache(clock=fake_clock)
    cache.put("key", "original", ttl=60)
    fake_clock.advance(50)
    cache.put("key", "updated", ttl=60)
    fake_clock.advance(50)
    assert cache.get("key") == "updated"


def test_size_counts_expired_entries_until_read(fake_clock: FakeClock) -> None:
    cache = TTLCache(clock=fake_clock)
    cache.put("a", 1, ttl=10)
    cache.put("b", 2, ttl=100)
    fake_clock.advance(20)
    assert cache.size() == 2
    assert cache.get("a") is None
    assert cache.size() == 1


def test_evict_expired(fake_clock: FakeClock) -> None:
    cache = TTLCache(clock=fake_clock)
    cache.put("a", 1, ttl=10)
    cache.put("b", 2, ttl=100)
    fake_clock.advance(20)
    assert cache.evict_expired() == 1
    assert cache.size() == 1
    assert cache.get("b") == 2


def test_put_sweeps_expired_entries(fake_clock: FakeClock) -> None:
    cache = TTLCache(clock=fake_clock)
    cache.put("site-a", 1, ttl=10)
    cache.put("site-b", 2, ttl=10)
    fake_clock.advance(10)
    assert cache.size() == 2

    cache.put("site-c", 3, ttl=10)

    assert cache.size() == 1
    assert cache.get("site-c") == 3


def test_put_keeps_live_entries(fake_clock: FakeClock) -> None:
    cache = TTLCache(clock=fake_clock)
    cache.put("site-a", 1, ttl=100)
    fake_clock.advance(50)
    cache.put("site-b", 2, ttl=100)
    assert cache.size() == 2
    assert cache.get("site-a") == 1

"""Curve provider and cache tests."""

import threading
import time

import pytest

from roi_engine.core.errors import InvalidInputError
from roi_engine.providers.curves import CurveCache, SyntheticCurveProvider

from conftest import make_curve


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_cache_expires_after_ttl():
    """Entries are served until the TTL elapses."""
    clock = FakeClock()
    cache = CurveCache(ttl_seconds=60, clock=clock)
    curve = make_curve([40.0] * 24)

    cache.put("ercot", curve)
    clock.now = 59.0
    assert cache.get("ercot") is curve

    clock.now = 60.0
    assert cache.get("ercot") is None


def test_cache_clear():
    """Clearing drops every entry."""
    cache = CurveCache(ttl_seconds=60, clock=FakeClock())
    cache.put("ercot", make_curve([40.0] * 24))
    cache.clear()
    assert cache.get("ercot") is None


def test_synthetic_curve_shape():
    """A synthetic year has 8,760 non-negative hourly prices."""
    curve = SyntheticCurveProvider(seed=1).get_curve("ercot")

    assert curve.hours == 8760
    assert curve.currency == "USD"
    assert curve.min_price_per_mwh >= 0
    assert curve.prices[0].timestamp.month == 1
    assert curve.prices[-1].timestamp.month == 12


def test_synthetic_curve_deterministic():
    """The same seed reproduces the same curve; a different seed does not."""
    first = SyntheticCurveProvider(seed=42).get_curve("aeso")
    again = SyntheticCurveProvider(seed=42).get_curve("aeso")
    other = SyntheticCurveProvider(seed=43).get_curve("aeso")

    assert first.currency == "CAD"
    assert [p.price_per_mwh for p in first.prices] == [p.price_per_mwh for p in again.prices]
    assert [p.price_per_mwh for p in first.prices] != [p.price_per_mwh for p in other.prices]


def test_synthetic_provider_uses_cache():
    """A second request for the same seed and region is served from the cache."""
    cache = CurveCache(ttl_seconds=3600, clock=FakeClock())
    first = SyntheticCurveProvider(seed=5, cache=cache).get_curve("ercot")
    second = SyntheticCurveProvider(seed=5, cache=cache).get_curve("ercot")
    assert second is first


@pytest.mark.parametrize("region", ["custom", "pjm"])
def test_synthetic_provider_rejects_region(region):
    """Regions without a wholesale market, or unknown ones, have no curve."""
    with pytest.raises(InvalidInputError):
        SyntheticCurveProvider(seed=1).get_curve(region)


def test_cache_drops_expired_entries_on_put():
    """Storing a curve sweeps out entries past their TTL."""
    clock = FakeClock()
    cache = CurveCache(ttl_seconds=60, clock=clock)
    cache.put("old", make_curve([40.0] * 24))

    clock.now = 120.0
    cache.put("new", make_curve([41.0] * 24))

    assert len(cache) == 1
    assert cache.get("old") is None
    assert cache.get("new") is not None


def test_cache_caps_entries_oldest_first():
    """Distinct seeds never grow the cache past its cap."""
    clock = FakeClock()
    cache = CurveCache(ttl_seconds=3600, clock=clock, max_entries=3)
    for seed in range(20):
        clock.now = float(seed)
        SyntheticCurveProvider(seed=seed, hours=24, cache=cache).get_curve("ercot")

    assert len(cache) == 3
    assert cache.get("synthetic:ercot:2025:0") is None
    assert cache.get("synthetic:ercot:2025:19") is not None


def test_concurrent_reads_of_expired_entry():
    """Two threads evicting the same expired entry both get a clean miss."""
    def slow_clock():
        time.sleep(0.05)
        return 1000.0

    cache = CurveCache(ttl_seconds=60, clock=lambda: 0.0)
    cache.put("k", make_curve([40.0] * 24))
    cache._clock = slow_clock

    results, errors = [], []

    def read():
        try:
            results.append(cache.get("k"))
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=read) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert results == [None, None]
    assert len(cache) == 0

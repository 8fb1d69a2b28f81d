"""
Energy-curve providers and their cache.

These sit outside the engine: routes resolve a `RegionalEnergyCurve` here and
hand the finished value to the engine, which never generates or caches curves.
"""

import logging
import threading
import time
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional, Protocol, Tuple

import numpy as np

from roi_engine.core.config import CURVE_CACHE_MAX_ENTRIES, CURVE_CACHE_TTL_SECONDS, HOURS_PER_YEAR
from roi_engine.core.errors import InvalidInputError
from roi_engine.models.energy import HourlyPrice, RegionalEnergyCurve
from roi_engine.models.regions import get_region_by_id


logger = logging.getLogger(__name__)


class CurveProvider(Protocol):
    """Anything that can produce an hourly wholesale curve for a region."""

    def get_curve(self, region: str) -> RegionalEnergyCurve:
        ...


class CurveCache:
    """
    Region-keyed curve cache with an explicit TTL and a size cap.

    The clock is injectable so expiry can be tested without sleeping. Routes
    run in a threadpool, so every access holds the lock.
    """

    def __init__(
        self,
        ttl_seconds: float = CURVE_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        max_entries: int = CURVE_CACHE_MAX_ENTRIES,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()
        # Insertion order is storage order, so the first key is the oldest
        self._entries: Dict[str, Tuple[float, RegionalEnergyCurve]] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _is_expired(self, stored_at: float, now: float) -> bool:
        return now - stored_at >= self.ttl_seconds

    def get(self, key: str) -> Optional[RegionalEnergyCurve]:
        """Return the cached curve, or None if missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, curve = entry
            if self._is_expired(stored_at, self._clock()):
                self._entries.pop(key, None)
                return None
            return curve

    def put(self, key: str, curve: RegionalEnergyCurve) -> None:
        """Store a curve, dropping expired entries and then the oldest over the cap."""
        with self._lock:
            now = self._clock()
            expired = [
                k for k, (stored_at, _) in self._entries.items() if self._is_expired(stored_at, now)
            ]
            for k in expired:
                del self._entries[k]

            self._entries.pop(key, None)
            while self._entries and len(self._entries) >= self.max_entries:
                oldest = next(iter(self._entries))
                del self._entries[oldest]
                logger.debug("Evicted curve %s from cache", oldest)

            self._entries[key] = (now, curve)

    def clear(self) -> None:
        """Clear all entries. Useful for testing."""
        with self._lock:
            self._entries.clear()


# Typical wholesale level per region, in the region's native currency per MWh
BASE_PRICE_PER_MWH = {
    "ercot": 45.0,
    "aeso": 70.0,
}


class SyntheticCurveProvider:
    """
    Seeded generator of a plausible hourly wholesale year.

    Prices follow a daily shape (overnight trough, evening peak) and a
    seasonal swing (summer and winter highs), with lognormal noise and
    occasional scarcity spikes. The same seed always yields the same curve.
    """

    def __init__(
        self,
        seed: int,
        year: int = 2025,
        hours: int = HOURS_PER_YEAR,
        cache: Optional[CurveCache] = None,
    ) -> None:
        self.seed = seed
        self.year = year
        self.hours = hours
        self.cache = cache

    def _cache_key(self, region: str) -> str:
        return f"synthetic:{region}:{self.year}:{self.seed}"

    def get_curve(self, region: str) -> RegionalEnergyCurve:
        """
        Return the curve for `region`, generating it on a cache miss.

        Raises:
            InvalidInputError: Unknown region, or a region without a wholesale market
        """
        profile = get_region_by_id(region)
        if profile is None:
            raise InvalidInputError(f"Unknown region: {region}")
        if not profile.has_wholesale_market:
            raise InvalidInputError(f"Region '{region}' has no wholesale curve; supply a flat rate")

        key = self._cache_key(region)
        if self.cache is not None:
            cached = self.cache.get(key)
            if cached is not None:
                logger.debug("Curve cache hit for %s", key)
                return cached

        curve = self._generate(region, profile.currency)
        if self.cache is not None:
            self.cache.put(key, curve)
        return curve

    def _generate(self, region: str, currency: str) -> RegionalEnergyCurve:
        rng = np.random.default_rng(self.seed)
        base = BASE_PRICE_PER_MWH[region]

        hour_index = np.arange(self.hours)
        hour_of_day = hour_index % 24
        day_of_year = hour_index // 24

        daily = 1.0 + 0.35 * np.sin(2.0 * np.pi * (hour_of_day - 10) / 24)
        # Peaks near mid-summer and mid-winter
        seasonal = 1.0 + 0.25 * np.cos(4.0 * np.pi * (day_of_year - 196) / 365)
        noise = rng.lognormal(mean=0.0, sigma=0.25, size=self.hours)
        spikes = np.where(rng.random(self.hours) < 0.01, rng.uniform(3.0, 10.0, self.hours), 1.0)

        prices = np.clip(base * daily * seasonal * noise * spikes, 0.0, None)

        start = datetime(self.year, 1, 1)
        logger.info(
            "Generated synthetic %s curve seed=%d mean=%.2f/MWh", region, self.seed, prices.mean()
        )
        return RegionalEnergyCurve(
            region=region,
            currency=currency,
            prices=[
                HourlyPrice(timestamp=start + timedelta(hours=int(h)), price_per_mwh=float(p))
                for h, p in zip(hour_index, prices)
            ],
        )

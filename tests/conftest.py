"""Shared fixtures: the reference single-unit configuration and snapshot."""

from datetime import datetime, timedelta

import pytest

from roi_engine.models.energy import HourlyPrice, RegionalEnergyCurve
from roi_engine.models.inputs import MiningConfiguration, NetworkSnapshot


@pytest.fixture
def snapshot() -> NetworkSnapshot:
    return NetworkSnapshot(
        price=90000.0,
        difficulty=110e12,
        network_hashrate=8e20,
        block_reward=3.125,
    )


@pytest.fixture
def configuration() -> MiningConfiguration:
    return MiningConfiguration(
        hashrate_th=200.0,
        power_draw_watts=3500,
        units=1,
        hardware_cost_per_unit=3800.0,
        pool_fee_percent=1.5,
        electricity_rate=0.05,
    )


def make_curve(prices, region="ercot", currency="USD", year=2025) -> RegionalEnergyCurve:
    """Hourly curve starting at midnight on January 1st."""
    start = datetime(year, 1, 1)
    return RegionalEnergyCurve(
        region=region,
        currency=currency,
        prices=[
            HourlyPrice(timestamp=start + timedelta(hours=i), price_per_mwh=p)
            for i, p in enumerate(prices)
        ],
    )

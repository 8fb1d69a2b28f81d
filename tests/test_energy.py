"""Hosting-year energy simulation tests."""

import random

import pytest

from roi_engine.core.config import CAD_TO_USD_RATE
from roi_engine.core.errors import InvalidInputError
from roi_engine.engine.energy import (
    calculate_operating_hours,
    simulate_hosting_year,
    wholesale_to_energy_rate,
)
from roi_engine.models.energy import RegionRateTable
from roi_engine.models.regions import get_region_by_id

from conftest import make_curve


def _random_prices(seed=7, hours=8760):
    rng = random.Random(seed)
    return [rng.uniform(10, 100) for _ in range(hours)]


def test_wholesale_rate_conversion():
    """$50/MWh at a 0.4 discount is $0.02/kWh."""
    assert wholesale_to_energy_rate(50.0, 0.4) == pytest.approx(0.02)


def test_operating_hours_rounds_down():
    """Operating hours are floored."""
    assert calculate_operating_hours(8760, 50) == 4380
    assert calculate_operating_hours(8760, 33.3) == 2917


def test_curve_selects_cheapest_hours():
    """300 kW at 50% uptime runs the cheapest 4,380 hours of the curve."""
    prices = _random_prices()
    result = simulate_hosting_year(300, 50, "ercot", curve=make_curve(prices))

    adders = get_region_by_id("ercot").rate_table.adders_total
    rates = sorted(p / 1000 * 0.4 + adders for p in prices)

    assert result.operating_hours == 4380
    assert result.curtailed_hours == 4380
    assert result.operating_hours + result.curtailed_hours == result.total_hours
    assert result.total_energy_kwh == pytest.approx(300 * 4380)
    assert result.total_energy_cost == pytest.approx(300 * sum(rates[:4380]))
    assert result.actual_uptime_percent == pytest.approx(50.0)


def test_selected_hours_never_cost_more_than_curtailed():
    """The realized average rate is the mean of the cheapest hours."""
    prices = _random_prices(seed=11)
    result = simulate_hosting_year(100, 25, "ercot", curve=make_curve(prices))

    adders = get_region_by_id("ercot").rate_table.adders_total
    rates = sorted(p / 1000 * 0.4 + adders for p in prices)
    cutoff = rates[result.operating_hours - 1]

    # Average all-in rate of the selected hours cannot exceed the cutoff
    assert result.average_rate <= cutoff + 1e-12
    assert result.average_rate == pytest.approx(sum(rates[:result.operating_hours]) / result.operating_hours)


def test_monthly_tally_matches_totals():
    """Monthly breakdown follows curve timestamps and sums to the year."""
    result = simulate_hosting_year(50, 70, "ercot", curve=make_curve(_random_prices(seed=3)))

    assert len(result.monthly) == 12
    assert result.monthly[0].total_hours == 31 * 24
    assert result.monthly[1].total_hours == 28 * 24
    assert sum(m.operating_hours for m in result.monthly) == result.operating_hours
    assert sum(m.energy_cost for m in result.monthly) == pytest.approx(result.total_energy_cost)


def test_short_curve_rejected():
    """A curve shorter than a year is a hard validation error."""
    with pytest.raises(InvalidInputError):
        simulate_hosting_year(100, 90, "ercot", curve=make_curve([40.0] * 100))


def test_unknown_region_rejected():
    """Unknown regions are rejected."""
    with pytest.raises(InvalidInputError):
        simulate_hosting_year(100, 90, "pjm", flat_rate=0.05)


def test_missing_rate_source_rejected():
    """Without a curve a flat rate is required."""
    with pytest.raises(InvalidInputError):
        simulate_hosting_year(100, 90, "custom")


def test_flat_rate_applies_adders():
    """Flat-rate runs price every operating hour at rate plus add-ons."""
    result = simulate_hosting_year(100, 50, "custom", flat_rate=0.04)
    adders = get_region_by_id("custom").rate_table.adders_total

    assert result.operating_hours == 4380
    assert result.average_rate == pytest.approx(0.04 + adders)
    assert result.rate_breakdown.total_rate == pytest.approx(0.04 + adders)
    assert sum(m.operating_hours for m in result.monthly) == 4380


def test_rate_table_override():
    """A request-level add-on table replaces the region's."""
    zero = RegionRateTable(
        transmission_rate=0, distribution_rate=0, ancillary_services_rate=0, regulatory_fees_rate=0
    )
    result = simulate_hosting_year(100, 100, "ercot", flat_rate=0.03, rate_table=zero)
    assert result.average_rate == pytest.approx(0.03)


def test_cad_curve_converted():
    """AESO curves in CAD are converted into the reporting currency."""
    zero = RegionRateTable(
        transmission_rate=0, distribution_rate=0, ancillary_services_rate=0, regulatory_fees_rate=0
    )
    curve = make_curve([100.0] * 8760, region="aeso", currency="CAD")
    result = simulate_hosting_year(10, 100, "aeso", curve=curve, rate_table=zero)
    assert result.average_rate == pytest.approx(100 / 1000 * 0.4 * CAD_TO_USD_RATE)


def test_multi_year_curve_rejected():
    """A curve spanning more than a year cannot be reported as one year."""
    with pytest.raises(InvalidInputError):
        simulate_hosting_year(100, 90, "ercot", curve=make_curve([40.0] * 17520))


def test_leap_year_curve_accepted():
    """A full leap year of hours is still one year."""
    result = simulate_hosting_year(100, 50, "ercot", curve=make_curve([40.0] * 8784, year=2024))
    assert result.total_hours == 8784
    assert result.operating_hours == 4392

"""Hour-by-hour energy cost simulation for hosting facilities."""

import logging
import math
from typing import List, Optional

from roi_engine.core.config import HOURS_PER_YEAR, WHOLESALE_DISCOUNT_FACTOR
from roi_engine.core.errors import InvalidInputError
from roi_engine.models.energy import (
    EnergyMonth,
    EnergyRateBreakdown,
    HostingEnergyResult,
    RegionalEnergyCurve,
    RegionRateTable,
)
from roi_engine.models.regions import currency_conversion_factor, get_region_by_id


logger = logging.getLogger(__name__)

LEAP_YEAR_HOURS = 8784


def wholesale_to_energy_rate(
    price_per_mwh: float,
    discount_factor: float = WHOLESALE_DISCOUNT_FACTOR,
    conversion_factor: float = 1.0,
) -> float:
    """Convert a posted wholesale price per MWh into a discounted energy rate per kWh."""
    return price_per_mwh / 1000 * discount_factor * conversion_factor


def calculate_operating_hours(total_hours: int, uptime_percent: float) -> int:
    """Hours the facility runs for a target uptime, rounded down."""
    return int(math.floor(total_hours * uptime_percent / 100))


def _spread_hours(operating_hours: int) -> List[int]:
    """Distribute operating hours across twelve months for flat-rate runs."""
    base, remainder = divmod(operating_hours, 12)
    return [base + (1 if i < remainder else 0) for i in range(12)]


def _validate_inputs(load_kw: float, uptime_percent: float) -> None:
    if load_kw <= 0:
        raise InvalidInputError("load_kw must be positive")
    if not 0 < uptime_percent <= 100:
        raise InvalidInputError("uptime_percent must be in (0, 100]")


def simulate_hosting_year(
    load_kw: float,
    uptime_percent: float,
    region: str,
    curve: Optional[RegionalEnergyCurve] = None,
    flat_rate: Optional[float] = None,
    discount_factor: float = WHOLESALE_DISCOUNT_FACTOR,
    rate_table: Optional[RegionRateTable] = None,
    expected_hours: int = HOURS_PER_YEAR,
    reporting_currency: str = "USD",
) -> HostingEnergyResult:
    """
    Simulate one year of facility energy cost.

    With a curve, every hour is priced at the discounted wholesale rate plus
    the region's fixed add-ons, and the cheapest `floor(hours * uptime%)`
    hours are selected to run; the rest are curtailed. Without a curve, the
    flat rate plus the same add-ons is applied to the uptime share of 8,760
    hours.

    Args:
        load_kw: Facility load in kW, already inflated by overhead
        uptime_percent: Target uptime as a whole-number percentage
        region: Region profile ID selecting the add-on table
        curve: Hourly wholesale curve, or None for a flat rate
        flat_rate: Energy rate per kWh used when no curve is supplied
        discount_factor: Multiplier on posted wholesale prices
        rate_table: Override for the region's add-on table
        expected_hours: Minimum number of hourly entries a curve must carry
        reporting_currency: Currency all outputs are expressed in

    Returns:
        HostingEnergyResult with totals, curtailment and rate breakdown

    Raises:
        InvalidInputError: Unknown region, curve shorter or longer than a year, or no rate source
    """
    _validate_inputs(load_kw, uptime_percent)

    profile = get_region_by_id(region)
    if profile is None:
        raise InvalidInputError(f"Unknown region: {region}")
    adders = rate_table or profile.rate_table

    if curve is not None:
        return _simulate_curve(
            load_kw, uptime_percent, region, curve, discount_factor, adders,
            expected_hours, reporting_currency,
        )

    if flat_rate is None:
        raise InvalidInputError("A flat rate is required when no energy curve is supplied")
    return _simulate_flat(load_kw, uptime_percent, region, flat_rate, adders)


def _simulate_curve(
    load_kw: float,
    uptime_percent: float,
    region: str,
    curve: RegionalEnergyCurve,
    discount_factor: float,
    adders: RegionRateTable,
    expected_hours: int,
    reporting_currency: str,
) -> HostingEnergyResult:
    total_hours = len(curve.prices)
    if total_hours < expected_hours:
        raise InvalidInputError(
            f"Energy curve has {total_hours} hours, expected at least {expected_hours}"
        )
    if total_hours > LEAP_YEAR_HOURS:
        raise InvalidInputError(
            f"Energy curve has {total_hours} hours, more than one year ({LEAP_YEAR_HOURS})"
        )

    fx = currency_conversion_factor(curve.currency, reporting_currency)
    energy_rates = [
        wholesale_to_energy_rate(p.price_per_mwh, discount_factor, fx) for p in curve.prices
    ]
    all_in_rates = [rate + adders.adders_total for rate in energy_rates]

    # Cheapest first; ties keep chronological order
    ranked = sorted(range(total_hours), key=lambda h: all_in_rates[h])
    operating_hours = calculate_operating_hours(total_hours, uptime_percent)
    selected = ranked[:operating_hours]
    curtailed_hours = total_hours - operating_hours

    total_kwh = load_kw * operating_hours
    total_cost = load_kw * sum(all_in_rates[h] for h in selected)
    avg_energy_rate = (
        sum(energy_rates[h] for h in selected) / operating_hours if operating_hours else 0.0
    )

    month_hours = [0] * 12
    month_running = [0] * 12
    month_cost = [0.0] * 12
    for price in curve.prices:
        month_hours[price.timestamp.month - 1] += 1
    for hour in selected:
        idx = curve.prices[hour].timestamp.month - 1
        month_running[idx] += 1
        month_cost[idx] += load_kw * all_in_rates[hour]

    monthly = [
        EnergyMonth(
            month=i + 1,
            total_hours=month_hours[i],
            operating_hours=month_running[i],
            energy_kwh=load_kw * month_running[i],
            energy_cost=month_cost[i],
        )
        for i in range(12)
    ]

    logger.debug(
        "Curve simulation region=%s hours=%d operating=%d curtailed=%d",
        region, total_hours, operating_hours, curtailed_hours,
    )

    return _build_result(
        region, load_kw, total_hours, operating_hours, total_kwh, total_cost,
        avg_energy_rate, adders, monthly,
    )


def _simulate_flat(
    load_kw: float,
    uptime_percent: float,
    region: str,
    flat_rate: float,
    adders: RegionRateTable,
) -> HostingEnergyResult:
    total_hours = HOURS_PER_YEAR
    operating_hours = calculate_operating_hours(total_hours, uptime_percent)
    all_in_rate = flat_rate + adders.adders_total

    total_kwh = load_kw * operating_hours
    total_cost = total_kwh * all_in_rate

    calendar_hours = _spread_hours(total_hours)
    monthly = [
        EnergyMonth(
            month=i + 1,
            total_hours=calendar_hours[i],
            operating_hours=hours,
            energy_kwh=load_kw * hours,
            energy_cost=load_kw * hours * all_in_rate,
        )
        for i, hours in enumerate(_spread_hours(operating_hours))
    ]

    return _build_result(
        region, load_kw, total_hours, operating_hours, total_kwh, total_cost,
        flat_rate, adders, monthly,
    )


def _build_result(
    region: str,
    load_kw: float,
    total_hours: int,
    operating_hours: int,
    total_kwh: float,
    total_cost: float,
    energy_rate: float,
    adders: RegionRateTable,
    monthly: List[EnergyMonth],
) -> HostingEnergyResult:
    average_rate = total_cost / total_kwh if total_kwh > 0 else 0.0
    breakdown = EnergyRateBreakdown(
        region=region,
        energy_rate=energy_rate,
        transmission_rate=adders.transmission_rate,
        distribution_rate=adders.distribution_rate,
        ancillary_services_rate=adders.ancillary_services_rate,
        regulatory_fees_rate=adders.regulatory_fees_rate,
        total_rate=energy_rate + adders.adders_total,
    )
    return HostingEnergyResult(
        region=region,
        load_kw=load_kw,
        total_hours=total_hours,
        operating_hours=operating_hours,
        curtailed_hours=total_hours - operating_hours,
        total_energy_kwh=total_kwh,
        total_energy_cost=total_cost,
        average_rate=average_rate,
        actual_uptime_percent=operating_hours / total_hours * 100 if total_hours else 0.0,
        rate_breakdown=breakdown,
        monthly=monthly,
    )

"""Hosting business model: annual ROI for a facility selling power to miners."""

import logging
from typing import List, Optional

from roi_engine.core.config import ASSUMPTIONS_VERSION, WHOLESALE_DISCOUNT_FACTOR
from roi_engine.core.errors import InvalidInputError
from roi_engine.engine.energy import simulate_hosting_year
from roi_engine.engine.metrics import safe_ratio
from roi_engine.models.energy import (
    HostingCostAnalytics,
    HostingEnergyResult,
    HostingMonth,
    HostingROIResults,
    RegionalEnergyCurve,
    RegionRateTable,
)
from roi_engine.models.inputs import HostingConfiguration


logger = logging.getLogger(__name__)


def _monthly_breakdown(
    configuration: HostingConfiguration,
    energy: HostingEnergyResult,
) -> List[HostingMonth]:
    months = []
    for month in energy.monthly:
        revenue = month.energy_kwh * configuration.hosting_fee_rate
        overhead = configuration.monthly_overhead
        months.append(
            HostingMonth(
                month=month.month,
                energy_kwh=month.energy_kwh,
                hosting_revenue=revenue,
                electricity_cost=month.energy_cost,
                operational_cost=overhead,
                net_profit=revenue - month.energy_cost - overhead,
                uptime_percent=safe_ratio(month.operating_hours, month.total_hours) * 100,
            )
        )
    return months


def calculate_cost_analytics(
    configuration: HostingConfiguration,
    total_kwh: float,
    revenue: float,
    electricity_cost: float,
    operational_cost: float,
) -> HostingCostAnalytics:
    """Break-even hosting fee and cost shares of revenue."""
    break_even_rate = safe_ratio(electricity_cost + operational_cost, total_kwh)
    fee = configuration.hosting_fee_rate
    net_profit = revenue - electricity_cost - operational_cost

    return HostingCostAnalytics(
        break_even_hosting_rate=break_even_rate,
        margin_of_safety=safe_ratio(fee - break_even_rate, fee) * 100,
        energy_cost_percentage=safe_ratio(electricity_cost, revenue) * 100,
        operational_cost_percentage=safe_ratio(operational_cost, revenue) * 100,
        profit_percentage=safe_ratio(net_profit, revenue) * 100,
    )


def run_hosting_analysis(
    configuration: HostingConfiguration,
    curve: Optional[RegionalEnergyCurve] = None,
    discount_factor: float = WHOLESALE_DISCOUNT_FACTOR,
    rate_table: Optional[RegionRateTable] = None,
    assumptions_version: str = ASSUMPTIONS_VERSION,
) -> HostingROIResults:
    """
    Annual economics of hosting `configuration.units` machines for clients.

    Clients pay the hosting fee on every kWh delivered. The facility buys
    that energy through the hour-by-hour simulation (or a flat custom rate
    when no curve is supplied) and carries a fixed monthly overhead.

    Raises:
        InvalidInputError: No curve and no custom rate, or an invalid curve
    """
    if curve is None and configuration.custom_rate is None:
        raise InvalidInputError("Hosting analysis needs an energy curve or a custom_rate")

    energy = simulate_hosting_year(
        load_kw=configuration.facility_load_kw,
        uptime_percent=configuration.expected_uptime_percent,
        region=configuration.region,
        curve=curve,
        flat_rate=configuration.custom_rate,
        discount_factor=discount_factor,
        rate_table=rate_table,
    )

    total_kwh = energy.total_energy_kwh
    revenue = total_kwh * configuration.hosting_fee_rate
    electricity_cost = energy.total_energy_cost
    operational_cost = configuration.monthly_overhead * 12
    net_profit = revenue - electricity_cost - operational_cost
    investment = configuration.infrastructure_cost

    payback_years = None
    if net_profit > 0:
        payback_years = investment / net_profit

    notes = []
    if curve is None:
        notes.append("Flat custom rate applied; no hourly curtailment")
    if net_profit <= 0:
        notes.append("Facility does not recover its costs at this hosting fee")
        logger.info(
            "Hosting analysis unprofitable: fee=%.4f net_profit=%.2f",
            configuration.hosting_fee_rate, net_profit,
        )

    return HostingROIResults(
        assumptions_version=assumptions_version,
        total_energy_usage_kwh=total_kwh,
        total_hosting_revenue=revenue,
        total_electricity_cost=electricity_cost,
        total_operational_cost=operational_cost,
        net_profit=net_profit,
        profit_margin_percent=safe_ratio(net_profit, revenue) * 100,
        roi_12_month=safe_ratio(net_profit, investment) * 100,
        payback_period_years=payback_years,
        average_uptime_percent=energy.actual_uptime_percent,
        curtailed_hours=energy.curtailed_hours,
        energy_rate_breakdown=energy.rate_breakdown,
        monthly_breakdown=_monthly_breakdown(configuration, energy),
        cost_analytics=calculate_cost_analytics(
            configuration, total_kwh, revenue, electricity_cost, operational_cost
        ),
        notes=notes,
    )

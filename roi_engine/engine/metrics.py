"""
Time-value-of-money metrics over a monthly cash-flow series.

All functions take the monthly net cash flows (month 1 first) and the
initial investment as a positive number treated as the month-0 outflow.
Cash flow for month `m` is discounted by `(1 + r) ** m`.
"""

import logging
import math
from typing import Dict, List, Optional, Sequence

from roi_engine.core.config import (
    DAYS_PER_YEAR,
    DEFAULT_IRR_SETTINGS,
    DEPRECIATION_MONTHS,
    IRRSolverSettings,
)
from roi_engine.models.results import DailyEconomics, DepreciationSchedule, PaybackPeriod


logger = logging.getLogger(__name__)

IRR_NO_RECOVERY = -100.0
IRR_FALLBACK = 0.0


def safe_ratio(numerator: float, denominator: float) -> float:
    """Division returning 0 for a zero denominator."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def calculate_npv(
    cash_flows: Sequence[float],
    initial_investment: float,
    monthly_rate: float,
) -> float:
    """Net present value at a monthly discount rate."""
    npv = -initial_investment
    for month, flow in enumerate(cash_flows, start=1):
        npv += flow / (1 + monthly_rate) ** month
    return npv


def _npv_and_derivative(flows: Sequence[float], rate: float) -> tuple[float, float]:
    """NPV of month-0-indexed flows and its derivative with respect to the rate."""
    npv = 0.0
    derivative = 0.0
    for i, flow in enumerate(flows):
        npv += flow / (1 + rate) ** i
        derivative -= i * flow / (1 + rate) ** (i + 1)
    return npv, derivative


def solve_monthly_irr(
    cash_flows: Sequence[float],
    initial_investment: float,
    settings: IRRSolverSettings = DEFAULT_IRR_SETTINGS,
) -> Optional[float]:
    """
    Damped Newton-Raphson search for the monthly rate at which NPV is zero.

    Returns:
        The monthly rate, or None if the iteration did not converge
    """
    flows = [-initial_investment, *cash_flows]
    total = sum(cash_flows)

    # Seed from a simple-payback estimate
    avg_monthly = total / len(cash_flows)
    simple_payback = initial_investment / avg_monthly if avg_monthly else 0.0
    guess = 1 / simple_payback if simple_payback > 0 else 0.05
    guess = max(0.001, min(guess, 0.5))

    for iteration in range(settings.max_iterations):
        npv, derivative = _npv_and_derivative(flows, guess)

        if abs(npv) < settings.tolerance:
            logger.debug("IRR converged after %d iterations at %.6f", iteration, guess)
            return guess
        if abs(derivative) < settings.min_derivative:
            break

        new_guess = guess - npv / derivative
        guess = guess + settings.damping * (new_guess - guess)
        guess = max(settings.min_rate, min(guess, settings.max_rate))

    npv, _ = _npv_and_derivative(flows, guess)
    if abs(npv) < settings.tolerance:
        return guess
    return None


def calculate_irr(
    cash_flows: Sequence[float],
    initial_investment: float,
    settings: IRRSolverSettings = DEFAULT_IRR_SETTINGS,
) -> float:
    """
    Annualized internal rate of return as a percentage.

    Returns -100 without iterating when the monthly flows sum to zero or
    less, and 0 when the solver fails to converge or the annualized rate
    falls outside the sanity bounds.
    """
    if not cash_flows or sum(cash_flows) <= 0:
        return IRR_NO_RECOVERY

    monthly = solve_monthly_irr(cash_flows, initial_investment, settings)
    if monthly is None:
        logger.warning("IRR did not converge; returning fallback of %.1f", IRR_FALLBACK)
        return IRR_FALLBACK

    annual = ((1 + monthly) ** 12 - 1) * 100
    if (
        not math.isfinite(annual)
        or annual < settings.min_annual_percent
        or annual > settings.max_annual_percent
    ):
        logger.warning("IRR %.2f%% outside sanity bounds; returning fallback", annual)
        return IRR_FALLBACK
    return annual


def calculate_mirr(
    cash_flows: Sequence[float],
    initial_investment: float,
    finance_rate: float,
    reinvest_rate: float,
) -> float:
    """
    Modified IRR, annualized as a percentage.

    Negative flows are discounted to the present at the finance rate and
    positive flows compounded to the horizon at the reinvestment rate (both
    annual rates applied monthly).
    """
    n = len(cash_flows)
    if n == 0:
        return 0.0

    pv_negative = initial_investment
    fv_positive = 0.0
    for i, flow in enumerate(cash_flows):
        if flow > 0:
            fv_positive += flow * (1 + reinvest_rate / 12) ** (n - i - 1)
        else:
            pv_negative += abs(flow) / (1 + finance_rate / 12) ** (i + 1)

    if pv_negative <= 0:
        return 0.0
    if fv_positive <= 0:
        return IRR_NO_RECOVERY

    mirr = (fv_positive / pv_negative) ** (1 / n) - 1
    return mirr * 12 * 100


def calculate_payback(
    cash_flows: Sequence[float],
    initial_investment: float,
    monthly_rate: float = 0.0,
) -> PaybackPeriod:
    """
    Months until cumulative (optionally discounted) cash flow turns non-negative.

    The crossing month is linearly interpolated between the last negative
    and first non-negative cumulative value. When the horizon ends first,
    a positive mean monthly flow yields an extrapolated estimate; otherwise
    the investment is never recovered.
    """
    if initial_investment <= 0:
        return PaybackPeriod(status="recovered", months=0.0, label="0.0 mo")

    cumulative = -initial_investment
    discounted: List[float] = []
    for month, flow in enumerate(cash_flows, start=1):
        value = flow / (1 + monthly_rate) ** month
        discounted.append(value)
        previous = cumulative
        cumulative += value
        if cumulative >= 0:
            months = (month - 1) + (-previous) / (cumulative - previous)
            return PaybackPeriod(status="recovered", months=months, label=f"{months:.1f} mo")

    horizon = len(cash_flows)
    mean_flow = sum(discounted) / horizon if horizon else 0.0
    if mean_flow <= 0:
        logger.info("Investment never recovered (mean monthly flow %.2f)", mean_flow)
        return PaybackPeriod(status="never", label="Never")

    estimated = horizon + (-cumulative) / mean_flow
    return PaybackPeriod(
        status="beyond_horizon",
        estimated_months=estimated,
        label=f"> {horizon} mo (~{estimated:.0f} mo)",
    )


def calculate_depreciation_schedule(
    total_investment: float,
    depreciation_months: int = DEPRECIATION_MONTHS,
) -> DepreciationSchedule:
    """Straight-line depreciation with end-of-year book values."""
    monthly = total_investment / depreciation_months
    annual = monthly * 12
    return DepreciationSchedule(
        annual_depreciation=annual,
        monthly_depreciation=monthly,
        book_value_year_1=max(0.0, total_investment - annual),
        book_value_year_2=max(0.0, total_investment - annual * 2),
        book_value_year_3=max(0.0, total_investment - annual * 3),
    )


def calculate_operating_metrics(
    daily: DailyEconomics,
    total_investment: float,
    maintenance_percent: float,
    npv: float,
    depreciation_months: int = DEPRECIATION_MONTHS,
) -> Dict[str, float]:
    """
    Annual margin ratios, EBITDA, cash-on-cash return and profitability index.

    Percentages are whole numbers; ratios over zero revenue or zero
    investment resolve to 0.
    """
    annual_revenue = daily.daily_revenue * DAYS_PER_YEAR
    annual_power_cost = daily.daily_power_cost * DAYS_PER_YEAR
    annual_pool_fees = daily.daily_pool_fees * DAYS_PER_YEAR
    annual_maintenance = total_investment * (maintenance_percent / 100)
    annual_depreciation = total_investment / depreciation_months * 12

    gross_profit = annual_revenue - annual_power_cost - annual_pool_fees
    ebitda = gross_profit - annual_maintenance
    net_profit = ebitda - annual_depreciation

    return {
        "ebitda": ebitda,
        "gross_margin": safe_ratio(gross_profit, annual_revenue) * 100,
        "operating_margin": safe_ratio(ebitda, annual_revenue) * 100,
        "net_margin": safe_ratio(net_profit, annual_revenue) * 100,
        "cash_on_cash_return": safe_ratio(ebitda, total_investment) * 100,
        "profitability_index": safe_ratio(npv + total_investment, total_investment),
    }

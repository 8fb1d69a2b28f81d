"""Tornado ranking and the price x electricity sensitivity grid."""

import math
from typing import Callable, List, Tuple

from roi_engine.core.config import ANNUAL_DISCOUNT_RATE, DAYS_PER_MONTH, DAYS_PER_YEAR, TORNADO_PERTURBATION
from roi_engine.engine.economics import calculate_annual_profit, calculate_daily_results
from roi_engine.engine.metrics import calculate_npv
from roi_engine.models.inputs import MiningConfiguration, NetworkSnapshot
from roi_engine.models.results import SensitivityPoint, TornadoItem


PRICE_CHANGES = [-50, -30, -20, -10, 0, 10, 20, 30, 50, 100]
ELECTRICITY_CHANGES = [-50, -25, 0, 25, 50, 100]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _tornado_variables(
    configuration: MiningConfiguration,
    snapshot: NetworkSnapshot,
    rate: float,
) -> List[Tuple[str, Callable[[float], float]]]:
    """Each variable maps a scale factor to annual profit with all else fixed."""

    def price(factor: float) -> float:
        adjusted = snapshot.model_copy(update={"price": snapshot.price * factor})
        return calculate_annual_profit(configuration, adjusted, rate)

    def electricity(factor: float) -> float:
        return calculate_annual_profit(configuration, snapshot, rate * factor)

    def difficulty(factor: float) -> float:
        adjusted = snapshot.model_copy(
            update={
                "network_hashrate": snapshot.network_hashrate * factor,
                "difficulty": snapshot.difficulty * factor,
            }
        )
        return calculate_annual_profit(configuration, adjusted, rate)

    def pool_fee(factor: float) -> float:
        adjusted = configuration.model_copy(
            update={"pool_fee_percent": configuration.pool_fee_percent * factor}
        )
        return calculate_annual_profit(adjusted, snapshot, rate)

    def units(factor: float) -> float:
        adjusted = configuration.model_copy(
            update={"units": _round_half_up(configuration.units * factor)}
        )
        return calculate_annual_profit(adjusted, snapshot, rate)

    return [
        ("BTC Price", price),
        ("Electricity Rate", electricity),
        ("Network Difficulty", difficulty),
        ("Pool Fee", pool_fee),
        ("Hardware Units", units),
    ]


def generate_tornado(
    configuration: MiningConfiguration,
    snapshot: NetworkSnapshot,
    rate: float,
    perturbation: float = TORNADO_PERTURBATION,
) -> List[TornadoItem]:
    """
    Perturb each variable by +/- `perturbation` and rank by annual profit impact.

    Sensitivity is the impact as a share of base annual profit, normalized to
    a 1% move in the variable (the low-to-high swing spans 2x the perturbation).
    """
    base = calculate_annual_profit(configuration, snapshot, rate)
    swing_percent = 2 * perturbation * 100

    items = []
    for name, test in _tornado_variables(configuration, snapshot, rate):
        low = test(1 - perturbation)
        high = test(1 + perturbation)
        impact = abs(high - low)
        sensitivity = impact / base * 100 / swing_percent if base != 0 else 0.0
        items.append(
            TornadoItem(
                variable=name,
                low_case=low,
                base_case=base,
                high_case=high,
                impact=impact,
                sensitivity=sensitivity,
            )
        )

    return sorted(items, key=lambda item: item.impact, reverse=True)


def generate_sensitivity_matrix(
    configuration: MiningConfiguration,
    snapshot: NetworkSnapshot,
    rate: float,
    annual_discount_rate: float = ANNUAL_DISCOUNT_RATE,
) -> List[SensitivityPoint]:
    """Annual ROI and 12-month NPV across a grid of price and electricity changes."""
    investment = configuration.total_investment
    points = []

    for price_change in PRICE_CHANGES:
        adjusted = snapshot.model_copy(update={"price": snapshot.price * (1 + price_change / 100)})
        for elec_change in ELECTRICITY_CHANGES:
            daily = calculate_daily_results(configuration, adjusted, rate * (1 + elec_change / 100))
            yearly = daily.daily_net_profit * DAYS_PER_YEAR
            npv = calculate_npv(
                [daily.daily_net_profit * DAYS_PER_MONTH] * 12,
                investment,
                annual_discount_rate / 12,
            )
            points.append(
                SensitivityPoint(
                    price_change_percent=price_change,
                    electricity_change_percent=elec_change,
                    roi=yearly / investment * 100 if investment > 0 else 0.0,
                    npv=npv,
                    profitable=daily.daily_net_profit > 0,
                )
            )

    return points

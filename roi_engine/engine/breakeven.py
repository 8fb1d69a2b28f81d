"""Closed-form break-even solves on the daily profit equation."""

from typing import Optional

from roi_engine.models.inputs import MiningConfiguration, NetworkSnapshot
from roi_engine.models.results import BreakEvenResult, DailyEconomics


def calculate_break_even_price(
    daily: DailyEconomics,
    pool_fee_percent: float,
) -> Optional[float]:
    """Price at which revenue after pool fees equals power cost."""
    net_btc = daily.daily_btc * (1 - pool_fee_percent / 100)
    if net_btc <= 0:
        return None
    return daily.daily_power_cost / net_btc


def calculate_break_even_rate(
    daily: DailyEconomics,
    pool_fee_percent: float,
) -> Optional[float]:
    """Electricity rate per kWh at which power cost consumes all net revenue."""
    if daily.daily_energy_kwh <= 0:
        return None
    return daily.daily_revenue * (1 - pool_fee_percent / 100) / daily.daily_energy_kwh


def calculate_break_even_difficulty(
    daily: DailyEconomics,
    pool_fee_percent: float,
    snapshot: NetworkSnapshot,
) -> Optional[float]:
    """
    Difficulty at which the fleet's yield just covers power cost.

    Yield scales inversely with difficulty, so the current difficulty is
    multiplied by current yield over the yield required to break even.
    """
    fee_multiplier = 1 - pool_fee_percent / 100
    required_revenue = daily.daily_power_cost / fee_multiplier
    required_btc = required_revenue / snapshot.price
    if required_btc <= 0:
        return None
    return snapshot.difficulty * (daily.daily_btc / required_btc)


def calculate_break_even(
    configuration: MiningConfiguration,
    snapshot: NetworkSnapshot,
    daily: DailyEconomics,
) -> BreakEvenResult:
    """Break-even price, rate and difficulty plus the price safety margin."""
    fee = configuration.pool_fee_percent
    price = calculate_break_even_price(daily, fee)

    safety_margin = None
    if price is not None:
        safety_margin = (snapshot.price - price) / snapshot.price * 100

    return BreakEvenResult(
        break_even_price=price,
        break_even_rate=calculate_break_even_rate(daily, fee),
        break_even_difficulty=calculate_break_even_difficulty(daily, fee, snapshot),
        safety_margin=safety_margin,
    )

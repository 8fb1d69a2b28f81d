"""Monthly cash-flow projection."""

import logging
from typing import List, Optional

from roi_engine.core.config import DAYS_PER_MONTH, DEPRECIATION_MONTHS, PROJECTION_MONTHS
from roi_engine.core.errors import InvalidInputError
from roi_engine.engine.economics import calculate_daily_results, calculate_pool_fees
from roi_engine.models.inputs import MiningConfiguration, NetworkSnapshot, ProjectionGrowth
from roi_engine.models.results import CashFlowMonth


logger = logging.getLogger(__name__)


def project_cash_flows(
    configuration: MiningConfiguration,
    snapshot: NetworkSnapshot,
    rate_per_kwh: float,
    months: int = PROJECTION_MONTHS,
    growth: Optional[ProjectionGrowth] = None,
    depreciation_months: int = DEPRECIATION_MONTHS,
) -> List[CashFlowMonth]:
    """
    Project monthly cash flows over the horizon.

    By default price and difficulty are held at the snapshot values so the
    projection agrees with the single-period daily figures. With `growth`,
    price and difficulty compound monthly; mined BTC falls in proportion to
    difficulty while power cost stays flat.

    Depreciation is reported per month for book-value tracking only and is
    not subtracted from net cash flow.

    Raises:
        InvalidInputError: If the horizon is not positive
    """
    if months <= 0:
        raise InvalidInputError("Projection horizon must be at least one month")
    if depreciation_months <= 0:
        raise InvalidInputError("Depreciation life must be at least one month")

    total_investment = configuration.total_investment
    monthly_maintenance = total_investment * (configuration.maintenance_percent / 100) / 12
    monthly_depreciation = total_investment / depreciation_months

    daily = calculate_daily_results(configuration, snapshot, rate_per_kwh)
    base_monthly_btc = daily.daily_btc * DAYS_PER_MONTH
    base_power_cost = daily.daily_power_cost * DAYS_PER_MONTH

    projections: List[CashFlowMonth] = []
    cumulative = -total_investment

    for month in range(1, months + 1):
        price = snapshot.price
        difficulty = snapshot.difficulty
        monthly_btc = base_monthly_btc

        if growth is not None:
            price = snapshot.price * (1 + growth.monthly_price_growth_percent / 100) ** (month - 1)
            difficulty = snapshot.difficulty * (
                1 + growth.monthly_difficulty_growth_percent / 100
            ) ** (month - 1)
            monthly_btc = base_monthly_btc * (snapshot.difficulty / difficulty)

        revenue = monthly_btc * price
        pool_fees = calculate_pool_fees(revenue, configuration.pool_fee_percent)
        net_cash_flow = revenue - base_power_cost - pool_fees - monthly_maintenance
        cumulative += net_cash_flow

        projections.append(
            CashFlowMonth(
                month=month,
                revenue=revenue,
                power_cost=base_power_cost,
                pool_fees=pool_fees,
                maintenance=monthly_maintenance,
                depreciation=monthly_depreciation,
                net_cash_flow=net_cash_flow,
                cumulative_cash_flow=cumulative,
                btc_mined=monthly_btc,
                btc_price=price,
                difficulty=difficulty,
            )
        )

    logger.debug(
        "Projected %d months, growth=%s, final cumulative=%.2f",
        months, growth is not None, cumulative,
    )
    return projections

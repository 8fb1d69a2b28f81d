"""Economic calculations for mining operations."""

from roi_engine.core.config import DAYS_PER_YEAR
from roi_engine.engine.mining import calculate_daily_btc_mined
from roi_engine.models.inputs import MiningConfiguration, NetworkSnapshot
from roi_engine.models.results import DailyEconomics


def calculate_daily_energy_kwh(
    power_kw: float,
    uptime: float = 1.0,
) -> float:
    """
    Calculate daily energy consumption.

    Args:
        power_kw: Facility power draw in kW
        uptime: Uptime ratio (0-1)

    Returns:
        Daily energy consumption in kWh
    """
    return power_kw * 24 * uptime


def calculate_daily_energy_cost(
    daily_energy_kwh: float,
    rate_per_kwh: float,
) -> float:
    """Calculate daily electricity cost."""
    return daily_energy_kwh * rate_per_kwh


def calculate_daily_revenue(
    daily_btc_mined: float,
    btc_price: float,
) -> float:
    """Calculate daily revenue in reporting currency."""
    return daily_btc_mined * btc_price


def calculate_pool_fees(revenue: float, pool_fee_percent: float) -> float:
    """Pool fees on gross revenue; the fee is a whole-number percentage."""
    return revenue * (pool_fee_percent / 100)


def calculate_daily_results(
    configuration: MiningConfiguration,
    snapshot: NetworkSnapshot,
    rate_per_kwh: float,
) -> DailyEconomics:
    """
    Single-day economics at the snapshot values.

    Net profit is revenue less power cost and pool fees. Maintenance is an
    investment-level cost and is applied by the cash-flow projection.
    """
    daily_btc = calculate_daily_btc_mined(
        units=configuration.units,
        unit_hashrate_th=configuration.hashrate_th,
        network_hashrate_hs=snapshot.network_hashrate,
        block_reward_btc=snapshot.block_reward,
        blocks_per_day=snapshot.blocks_per_day,
    )
    daily_revenue = calculate_daily_revenue(daily_btc, snapshot.price)

    power_kw = configuration.facility_power_kw
    daily_energy_kwh = calculate_daily_energy_kwh(power_kw)
    daily_power_cost = calculate_daily_energy_cost(daily_energy_kwh, rate_per_kwh)
    daily_pool_fees = calculate_pool_fees(daily_revenue, configuration.pool_fee_percent)

    return DailyEconomics(
        daily_btc=daily_btc,
        daily_revenue=daily_revenue,
        daily_power_cost=daily_power_cost,
        daily_pool_fees=daily_pool_fees,
        daily_net_profit=daily_revenue - daily_power_cost - daily_pool_fees,
        daily_energy_kwh=daily_energy_kwh,
        total_power_kw=power_kw,
        effective_rate=rate_per_kwh,
    )


def calculate_annual_profit(
    configuration: MiningConfiguration,
    snapshot: NetworkSnapshot,
    rate_per_kwh: float,
) -> float:
    """Daily net profit scaled to a year."""
    return calculate_daily_results(configuration, snapshot, rate_per_kwh).daily_net_profit * DAYS_PER_YEAR

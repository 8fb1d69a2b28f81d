"""Bitcoin mining yield calculations."""

from roi_engine.core.config import BLOCKS_PER_DAY


def calculate_network_share(
    units: int,
    unit_hashrate_th: float,
    network_hashrate_hs: float,
) -> float:
    """
    Fraction of network hashrate contributed by the fleet.

    Args:
        units: Number of mining units
        unit_hashrate_th: Hashrate per unit in TH/s
        network_hashrate_hs: Network hashrate in H/s

    Returns:
        Share of the network (0 when the network hashrate is not positive)
    """
    if network_hashrate_hs <= 0:
        return 0.0
    our_hashrate_hs = units * unit_hashrate_th * 1e12  # Convert TH to H
    return our_hashrate_hs / network_hashrate_hs


def calculate_daily_btc_mined(
    units: int,
    unit_hashrate_th: float,
    network_hashrate_hs: float,
    block_reward_btc: float = 3.125,
    blocks_per_day: float = BLOCKS_PER_DAY,
) -> float:
    """
    Calculate daily BTC mined before pool fees.

    Args:
        units: Number of mining units
        unit_hashrate_th: Hashrate per unit in TH/s
        network_hashrate_hs: Network hashrate in H/s
        block_reward_btc: Block subsidy in BTC (default 3.125)
        blocks_per_day: Expected blocks per day (default 144)

    Returns:
        Expected BTC mined per day
    """
    share = calculate_network_share(units, unit_hashrate_th, network_hashrate_hs)
    return share * blocks_per_day * block_reward_btc

"""Weighted risk scoring."""

from roi_engine.models.inputs import MiningConfiguration
from roi_engine.models.results import DailyEconomics, RiskScores


# Historical BTC volatility runs ~60-80% annualized
PRICE_RISK_BASELINE = 70.0
# Difficulty has grown steadily across cycles
DIFFICULTY_RISK_BASELINE = 60.0
# W/TH to score points
OPERATIONAL_RISK_SCALE = 3.0

WEIGHTS = {
    "price": 0.4,
    "difficulty": 0.3,
    "operational": 0.2,
    "exposure": 0.1,
}


def _clamp_score(value: float) -> float:
    return max(0.0, min(100.0, value))


def calculate_risk_scores(
    configuration: MiningConfiguration,
    daily: DailyEconomics,
) -> RiskScores:
    """
    Score price, difficulty, operational and power-cost risk.

    Operational risk rises with W/TH; power-cost exposure is power cost as a
    percentage of revenue (full exposure when there is no revenue).
    """
    operational = _clamp_score(configuration.efficiency_w_per_th * OPERATIONAL_RISK_SCALE)

    if daily.daily_revenue > 0:
        exposure = _clamp_score(daily.daily_power_cost / daily.daily_revenue * 100)
    else:
        exposure = 100.0

    overall = (
        PRICE_RISK_BASELINE * WEIGHTS["price"]
        + DIFFICULTY_RISK_BASELINE * WEIGHTS["difficulty"]
        + operational * WEIGHTS["operational"]
        + exposure * WEIGHTS["exposure"]
    )

    return RiskScores(
        price_risk=PRICE_RISK_BASELINE,
        difficulty_risk=DIFFICULTY_RISK_BASELINE,
        operational_risk=operational,
        volatility_exposure=exposure,
        overall=overall,
    )

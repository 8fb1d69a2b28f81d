"""Named macro scenarios over a three-year horizon."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from roi_engine.engine.economics import calculate_annual_profit
from roi_engine.models.inputs import MiningConfiguration, NetworkSnapshot
from roi_engine.models.results import ScenarioResult


SCENARIO_YEARS = 3


class ScenarioDefinition(BaseModel):
    """Growth assumptions reached by the end of year 3, as whole-number percentages."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    price_growth: float = Field(..., description="BTC price change by year 3 (%)")
    difficulty_growth: float = Field(..., description="Difficulty change by year 3 (%)")
    electricity_change: float = Field(..., description="Electricity rate change by year 3 (%)")
    probability: str


SCENARIO_LIBRARY: List[ScenarioDefinition] = [
    ScenarioDefinition(
        name="Bull Market",
        description="Strong BTC appreciation, moderate difficulty growth",
        price_growth=50,
        difficulty_growth=40,
        electricity_change=5,
        probability="Medium",
    ),
    ScenarioDefinition(
        name="Bear Market",
        description="Price decline with reduced mining competition",
        price_growth=-40,
        difficulty_growth=10,
        electricity_change=0,
        probability="Medium",
    ),
    ScenarioDefinition(
        name="Consolidation",
        description="Sideways price action, steady difficulty increase",
        price_growth=10,
        difficulty_growth=50,
        electricity_change=10,
        probability="High",
    ),
    ScenarioDefinition(
        name="Super Cycle",
        description="Aggressive price appreciation post-halving",
        price_growth=200,
        difficulty_growth=80,
        electricity_change=15,
        probability="Low",
    ),
    ScenarioDefinition(
        name="Mining Exodus",
        description="Major miners exit, difficulty drops",
        price_growth=-20,
        difficulty_growth=-30,
        electricity_change=20,
        probability="Low",
    ),
]


def scenario_year_profit(
    scenario: ScenarioDefinition,
    configuration: MiningConfiguration,
    snapshot: NetworkSnapshot,
    rate: float,
    year: int,
) -> float:
    """Annual net profit in `year`, with each assumption ramped linearly to year 3."""
    ramp = year / SCENARIO_YEARS
    price_multiplier = 1 + scenario.price_growth / 100 * ramp
    difficulty_multiplier = 1 + scenario.difficulty_growth / 100 * ramp
    electricity_multiplier = 1 + scenario.electricity_change / 100 * ramp

    adjusted = snapshot.model_copy(
        update={
            "price": snapshot.price * price_multiplier,
            "network_hashrate": snapshot.network_hashrate * difficulty_multiplier,
            "difficulty": snapshot.difficulty * difficulty_multiplier,
        }
    )
    return calculate_annual_profit(configuration, adjusted, rate * electricity_multiplier)


def evaluate_scenario(
    scenario: ScenarioDefinition,
    configuration: MiningConfiguration,
    snapshot: NetworkSnapshot,
    rate: float,
) -> ScenarioResult:
    """Three yearly profits, their total, and ROI on the hardware investment."""
    profits = [
        scenario_year_profit(scenario, configuration, snapshot, rate, year)
        for year in range(1, SCENARIO_YEARS + 1)
    ]
    total = sum(profits)
    investment = configuration.total_investment

    return ScenarioResult(
        name=scenario.name,
        description=scenario.description,
        price_growth=scenario.price_growth,
        difficulty_growth=scenario.difficulty_growth,
        electricity_change=scenario.electricity_change,
        year1_profit=profits[0],
        year2_profit=profits[1],
        year3_profit=profits[2],
        total_profit=total,
        roi=total / investment * 100 if investment > 0 else 0.0,
        probability=scenario.probability,
    )


def generate_scenarios(
    configuration: MiningConfiguration,
    snapshot: NetworkSnapshot,
    rate: float,
    scenarios: List[ScenarioDefinition] = SCENARIO_LIBRARY,
) -> List[ScenarioResult]:
    """Evaluate every scenario in the library."""
    return [evaluate_scenario(s, configuration, snapshot, rate) for s in scenarios]

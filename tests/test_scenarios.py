"""Scenario engine tests."""

import pytest

from roi_engine.engine.economics import calculate_annual_profit
from roi_engine.engine.scenarios import (
    SCENARIO_LIBRARY,
    ScenarioDefinition,
    evaluate_scenario,
    generate_scenarios,
)


def test_all_scenarios_evaluated(configuration, snapshot):
    """Every library scenario produces a result with three yearly profits."""
    results = generate_scenarios(configuration, snapshot, 0.05)

    assert [r.name for r in results] == [s.name for s in SCENARIO_LIBRARY]
    for result in results:
        assert result.total_profit == pytest.approx(
            result.year1_profit + result.year2_profit + result.year3_profit
        )
        assert result.roi == pytest.approx(result.total_profit / 3800 * 100)


def test_flat_scenario_matches_base(configuration, snapshot):
    """With no changes every year equals the base annual profit."""
    flat = ScenarioDefinition(
        name="Flat", description="No change", price_growth=0, difficulty_growth=0,
        electricity_change=0, probability="Low",
    )
    result = evaluate_scenario(flat, configuration, snapshot, 0.05)
    base = calculate_annual_profit(configuration, snapshot, 0.05)
    assert result.total_profit == pytest.approx(3 * base)


def test_year_three_reaches_full_change(configuration, snapshot):
    """The linear ramp applies the full price change in year 3."""
    doubled = ScenarioDefinition(
        name="Double", description="", price_growth=100, difficulty_growth=0,
        electricity_change=0, probability="Low",
    )
    result = evaluate_scenario(doubled, configuration, snapshot, 0.05)
    at_double = calculate_annual_profit(
        configuration, snapshot.model_copy(update={"price": snapshot.price * 2}), 0.05
    )
    assert result.year3_profit == pytest.approx(at_double)


def test_profit_monotone_in_price_growth(configuration, snapshot):
    """Higher price growth never lowers total profit."""
    totals = []
    for growth in [-50, -20, 0, 20, 50, 200]:
        scenario = ScenarioDefinition(
            name="Sweep", description="", price_growth=growth, difficulty_growth=30,
            electricity_change=10, probability="Low",
        )
        totals.append(evaluate_scenario(scenario, configuration, snapshot, 0.05).total_profit)

    assert totals == sorted(totals)

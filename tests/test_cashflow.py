"""Cash-flow projection tests."""

import pytest

from roi_engine.core.errors import InvalidInputError
from roi_engine.engine.cashflow import project_cash_flows
from roi_engine.engine.economics import calculate_daily_results
from roi_engine.models.inputs import ProjectionGrowth


def test_projection_length_and_cumulative(configuration, snapshot):
    """Cumulative cash flow starts at -investment and accumulates each month."""
    projections = project_cash_flows(configuration, snapshot, 0.05)

    assert len(projections) == 36
    previous = -configuration.total_investment
    for month in projections:
        assert month.cumulative_cash_flow == pytest.approx(previous + month.net_cash_flow)
        previous = month.cumulative_cash_flow


def test_constant_projection_matches_daily(configuration, snapshot):
    """Without growth each month is 30 days of the daily figures."""
    daily = calculate_daily_results(configuration, snapshot, 0.05)
    first = project_cash_flows(configuration, snapshot, 0.05, months=3)[0]

    assert first.revenue == pytest.approx(daily.daily_revenue * 30)
    assert first.power_cost == pytest.approx(daily.daily_power_cost * 30)
    assert first.net_cash_flow == pytest.approx(daily.daily_net_profit * 30)


def test_maintenance_and_depreciation(configuration, snapshot):
    """Maintenance is deducted monthly; depreciation is reported but not deducted."""
    maintained = configuration.model_copy(update={"maintenance_percent": 12.0})
    plain = project_cash_flows(configuration, snapshot, 0.05, months=1)[0]
    month = project_cash_flows(maintained, snapshot, 0.05, months=1)[0]

    assert month.maintenance == pytest.approx(3800 * 0.12 / 12)
    assert month.net_cash_flow == pytest.approx(plain.net_cash_flow - month.maintenance)
    assert month.depreciation == pytest.approx(3800 / 36)


def test_growth_projection(configuration, snapshot):
    """Price growth raises revenue while difficulty growth cuts the BTC mined."""
    growth = ProjectionGrowth(monthly_price_growth_percent=1.0, monthly_difficulty_growth_percent=0.0)
    projections = project_cash_flows(configuration, snapshot, 0.05, months=12, growth=growth)

    assert projections[0].btc_price == pytest.approx(snapshot.price)
    assert projections[11].btc_price == pytest.approx(snapshot.price * 1.01 ** 11)
    assert projections[11].revenue > projections[0].revenue

    harder = ProjectionGrowth(monthly_price_growth_percent=0.0, monthly_difficulty_growth_percent=2.0)
    projections = project_cash_flows(configuration, snapshot, 0.05, months=12, growth=harder)
    assert projections[11].btc_mined == pytest.approx(projections[0].btc_mined / 1.02 ** 11)


@pytest.mark.parametrize("months", [0, -1])
def test_non_positive_horizon_rejected(configuration, snapshot, months):
    """A non-positive horizon is a hard validation error."""
    with pytest.raises(InvalidInputError):
        project_cash_flows(configuration, snapshot, 0.05, months=months)

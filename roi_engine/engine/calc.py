"""Main analysis orchestration."""

import logging
from typing import List, Optional

from roi_engine.core.config import (
    ANNUAL_DISCOUNT_RATE,
    ASSUMPTIONS_VERSION,
    DEPRECIATION_MONTHS,
    FINANCE_RATE,
    PROJECTION_MONTHS,
    REINVESTMENT_RATE,
)
from roi_engine.core.errors import InvalidInputError
from roi_engine.engine.breakeven import calculate_break_even
from roi_engine.engine.cashflow import project_cash_flows
from roi_engine.engine.economics import calculate_daily_results
from roi_engine.engine.energy import simulate_hosting_year
from roi_engine.engine.metrics import (
    calculate_depreciation_schedule,
    calculate_irr,
    calculate_mirr,
    calculate_npv,
    calculate_operating_metrics,
    calculate_payback,
)
from roi_engine.engine.risk import calculate_risk_scores
from roi_engine.engine.scenarios import generate_scenarios
from roi_engine.engine.sensitivity import generate_sensitivity_matrix, generate_tornado
from roi_engine.models.energy import RegionalEnergyCurve
from roi_engine.models.inputs import AnalysisMode, MiningConfiguration, NetworkSnapshot, ProjectionGrowth
from roi_engine.models.miners import get_miner_by_id
from roi_engine.models.results import FinancialMetrics


logger = logging.getLogger(__name__)

DEFAULT_REGION = "ercot"


def resolve_configuration(configuration: MiningConfiguration) -> tuple[MiningConfiguration, List[str]]:
    """
    Fill hashrate and power draw from the miner library when `miner_id` is set.

    Returns:
        The effective configuration and any notes about the lookup
    """
    if not configuration.miner_id:
        return configuration, []

    miner = get_miner_by_id(configuration.miner_id)
    if miner is None:
        return configuration, [f"Unknown miner_id '{configuration.miner_id}'; using supplied specs"]

    effective = configuration.model_copy(
        update={"hashrate_th": miner.hashrate_th, "power_draw_watts": float(miner.power_w)}
    )
    return effective, [f"Specs filled from miner library: {miner.name}"]


def resolve_effective_rate(
    configuration: MiningConfiguration,
    mode: AnalysisMode,
    region: Optional[str] = None,
    curve: Optional[RegionalEnergyCurve] = None,
) -> float:
    """
    Rate per kWh the operation pays for power.

    Self-mining pays its own electricity rate. Hosted miners pay the hosting
    fee when one is quoted; otherwise the all-in average rate of a full-uptime
    hosting-year simulation over the curve (or the flat wholesale rate).
    Add-ons come from `region`, falling back to the curve's own region.

    Raises:
        InvalidInputError: If the mode has no rate source
    """
    if mode == "self":
        if configuration.electricity_rate is None:
            raise InvalidInputError("electricity_rate is required for self-mining")
        return configuration.electricity_rate

    if configuration.hosting_fee_rate is not None:
        return configuration.hosting_fee_rate

    if curve is None and configuration.wholesale_electricity_rate is None:
        raise InvalidInputError(
            "hosting mode needs hosting_fee_rate, wholesale_electricity_rate or a curve"
        )

    if region is None:
        region = curve.region if curve is not None else DEFAULT_REGION

    energy = simulate_hosting_year(
        load_kw=configuration.facility_power_kw,
        uptime_percent=100,
        region=region,
        curve=curve,
        flat_rate=configuration.wholesale_electricity_rate,
    )
    return energy.average_rate


def run_full_analysis(
    configuration: MiningConfiguration,
    snapshot: NetworkSnapshot,
    mode: AnalysisMode = "self",
    *,
    region: Optional[str] = None,
    curve: Optional[RegionalEnergyCurve] = None,
    growth: Optional[ProjectionGrowth] = None,
    assumptions_version: str = ASSUMPTIONS_VERSION,
) -> FinancialMetrics:
    """
    Perform the complete financial analysis for one configuration.

    Args:
        configuration: Hardware and cost configuration
        snapshot: Price and network state
        mode: "self" (own electricity) or "hosting" (hosted machines)
        region: Region profile for hosted energy cost (defaults to the curve's region)
        curve: Hourly wholesale curve for hosted energy cost
        growth: Optional compounding growth for the cash-flow projection
        assumptions_version: Version echoed in the result

    Returns:
        FinancialMetrics bundle with metrics, projections and analyses
    """
    configuration, notes = resolve_configuration(configuration)
    rate = resolve_effective_rate(configuration, mode, region, curve)
    investment = configuration.total_investment

    daily = calculate_daily_results(configuration, snapshot, rate)

    projections = project_cash_flows(
        configuration,
        snapshot,
        rate,
        months=PROJECTION_MONTHS,
        growth=growth,
        depreciation_months=DEPRECIATION_MONTHS,
    )
    flows = [month.net_cash_flow for month in projections]
    monthly_discount = ANNUAL_DISCOUNT_RATE / 12

    npv = calculate_npv(flows, investment, monthly_discount)
    operating = calculate_operating_metrics(
        daily, investment, configuration.maintenance_percent, npv, DEPRECIATION_MONTHS
    )
    payback = calculate_payback(flows, investment)

    notes.extend(
        [
            "Transaction fees not included in mining revenue",
            f"Constant block subsidy ({snapshot.block_reward} BTC); halving events not modeled",
            "Depreciation is non-cash and excluded from net cash flow",
        ]
    )
    if growth is None:
        notes.append("Price and difficulty held at snapshot values across the projection")
    if payback.status == "never":
        notes.append("Investment is not recovered at current economics")

    logger.info(
        "Analysis mode=%s units=%d rate=%.4f daily_net=%.2f payback=%s",
        mode, configuration.units, rate, daily.daily_net_profit, payback.label,
    )

    return FinancialMetrics(
        assumptions_version=assumptions_version,
        mode=mode,
        total_investment=investment,
        daily=daily,
        npv=npv,
        irr=calculate_irr(flows, investment),
        mirr=calculate_mirr(flows, investment, FINANCE_RATE, REINVESTMENT_RATE),
        payback_period=payback,
        discounted_payback=calculate_payback(flows, investment, monthly_discount),
        profitability_index=operating["profitability_index"],
        ebitda=operating["ebitda"],
        gross_margin=operating["gross_margin"],
        operating_margin=operating["operating_margin"],
        net_margin=operating["net_margin"],
        cash_on_cash_return=operating["cash_on_cash_return"],
        break_even=calculate_break_even(configuration, snapshot, daily),
        risk=calculate_risk_scores(configuration, daily),
        depreciation=calculate_depreciation_schedule(investment, DEPRECIATION_MONTHS),
        cash_flow_projections=projections,
        cumulative_cash_flow=[month.cumulative_cash_flow for month in projections],
        sensitivity_matrix=generate_sensitivity_matrix(configuration, snapshot, rate),
        tornado_data=generate_tornado(configuration, snapshot, rate),
        scenarios=generate_scenarios(configuration, snapshot, rate),
        notes=notes,
    )

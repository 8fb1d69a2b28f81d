from pydantic import BaseModel, ConfigDict, Field
from typing import Literal, Optional, List


class DailyEconomics(BaseModel):
    """Single-day mining economics at the snapshot values."""

    model_config = ConfigDict(frozen=True)

    daily_btc: float = Field(..., description="BTC mined per day (before pool fees)")
    daily_revenue: float = Field(..., description="Gross revenue per day")
    daily_power_cost: float = Field(..., description="Electricity cost per day")
    daily_pool_fees: float = Field(..., description="Pool fees per day")
    daily_net_profit: float = Field(..., description="Revenue - power - pool fees")
    daily_energy_kwh: float = Field(..., description="Energy consumed per day")
    total_power_kw: float = Field(..., description="Combined power draw in kW")
    effective_rate: float = Field(..., description="Rate per kWh used for power cost")


class CashFlowMonth(BaseModel):
    """One month of the cash-flow projection."""

    model_config = ConfigDict(frozen=True)

    month: int
    revenue: float
    power_cost: float
    pool_fees: float
    maintenance: float
    depreciation: float = Field(..., description="Non-cash, reference only")
    net_cash_flow: float
    cumulative_cash_flow: float
    btc_mined: float
    btc_price: float
    difficulty: float


class PaybackPeriod(BaseModel):
    """
    Payback outcome.

    `recovered` carries interpolated months; `beyond_horizon` carries an
    extrapolated estimate; `never` means mean monthly cash flow is not positive.
    """

    model_config = ConfigDict(frozen=True)

    status: Literal["recovered", "beyond_horizon", "never"]
    months: Optional[float] = Field(None, description="Months to payback within the horizon")
    estimated_months: Optional[float] = Field(None, description="Extrapolated months beyond the horizon")
    label: str


class BreakEvenResult(BaseModel):
    """Inputs at which daily net profit is exactly zero (None when undefined)."""

    model_config = ConfigDict(frozen=True)

    break_even_price: Optional[float]
    break_even_rate: Optional[float]
    break_even_difficulty: Optional[float]
    safety_margin: Optional[float] = Field(..., description="% the current price sits above break-even")


class RiskScores(BaseModel):
    """Weighted risk sub-scores, each in [0, 100]."""

    model_config = ConfigDict(frozen=True)

    price_risk: float
    difficulty_risk: float
    operational_risk: float
    volatility_exposure: float = Field(..., description="Power cost as % of revenue")
    overall: float


class DepreciationSchedule(BaseModel):
    """Straight-line depreciation over the hardware life."""

    model_config = ConfigDict(frozen=True)

    annual_depreciation: float
    monthly_depreciation: float
    book_value_year_1: float
    book_value_year_2: float
    book_value_year_3: float


class TornadoItem(BaseModel):
    """Annual profit response to a +/- perturbation of one variable."""

    model_config = ConfigDict(frozen=True)

    variable: str
    low_case: float
    base_case: float
    high_case: float
    impact: float = Field(..., description="|high - low|")
    sensitivity: float = Field(..., description="% profit change per 1% variable change")


class SensitivityPoint(BaseModel):
    """One cell of the price x electricity sensitivity grid."""

    model_config = ConfigDict(frozen=True)

    price_change_percent: float
    electricity_change_percent: float
    roi: float
    npv: float
    profitable: bool


class ScenarioResult(BaseModel):
    """Three-year outcome of a named macro scenario."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    price_growth: float
    difficulty_growth: float
    electricity_change: float
    year1_profit: float
    year2_profit: float
    year3_profit: float
    total_profit: float
    roi: float
    probability: str


class FinancialMetrics(BaseModel):
    """Full analysis bundle for one configuration and snapshot."""

    model_config = ConfigDict(frozen=True)

    assumptions_version: str
    mode: Literal["self", "hosting"]
    total_investment: float
    daily: DailyEconomics

    npv: float
    irr: float = Field(..., description="Annual %, -100 when flows never recover, 0 on non-convergence")
    mirr: float
    payback_period: PaybackPeriod
    discounted_payback: PaybackPeriod
    profitability_index: float

    ebitda: float
    gross_margin: float
    operating_margin: float
    net_margin: float
    cash_on_cash_return: float

    break_even: BreakEvenResult
    risk: RiskScores
    depreciation: DepreciationSchedule

    cash_flow_projections: List[CashFlowMonth]
    cumulative_cash_flow: List[float]
    sensitivity_matrix: List[SensitivityPoint]
    tornado_data: List[TornadoItem]
    scenarios: List[ScenarioResult]
    notes: List[str] = Field(default_factory=list, description="Calculation notes and warnings")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="ok")
    service: str = Field(default="roi-engine")

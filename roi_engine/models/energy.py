from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class HourlyPrice(BaseModel):
    """One hour of posted wholesale energy price (before any discount)."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(..., description="Start of the hour")
    price_per_mwh: float = Field(..., description="Wholesale price per MWh in the curve currency")


class RegionalEnergyCurve(BaseModel):
    """Hourly wholesale price curve for one region, canonically one year (8,760 hours)."""

    model_config = ConfigDict(frozen=True)

    region: str = Field(..., description="Region profile identifier")
    currency: Literal["USD", "CAD"] = Field(default="USD", description="Native curve currency")
    prices: List[HourlyPrice] = Field(..., description="Hourly prices in chronological order")

    @computed_field
    @property
    def hours(self) -> int:
        """Number of hourly entries in the curve."""
        return len(self.prices)

    @computed_field
    @property
    def average_price_per_mwh(self) -> float:
        """Mean wholesale price over the curve."""
        if not self.prices:
            return 0.0
        return sum(p.price_per_mwh for p in self.prices) / len(self.prices)

    @computed_field
    @property
    def min_price_per_mwh(self) -> Optional[float]:
        """Lowest wholesale price in the curve."""
        return min((p.price_per_mwh for p in self.prices), default=None)

    @computed_field
    @property
    def max_price_per_mwh(self) -> Optional[float]:
        """Highest wholesale price in the curve."""
        return max((p.price_per_mwh for p in self.prices), default=None)


class RegionRateTable(BaseModel):
    """Fixed per-kWh delivery add-ons applied on top of the energy rate."""

    model_config = ConfigDict(frozen=True)

    transmission_rate: float = Field(..., ge=0, description="Transmission charge per kWh")
    distribution_rate: float = Field(..., ge=0, description="Distribution charge per kWh")
    ancillary_services_rate: float = Field(..., ge=0, description="Ancillary services charge per kWh")
    regulatory_fees_rate: float = Field(..., ge=0, description="Regulatory fees per kWh")

    @computed_field
    @property
    def adders_total(self) -> float:
        """Sum of all fixed add-ons per kWh."""
        return (
            self.transmission_rate
            + self.distribution_rate
            + self.ancillary_services_rate
            + self.regulatory_fees_rate
        )


class EnergyRateBreakdown(BaseModel):
    """Decomposition of the all-in realized cost per kWh."""

    model_config = ConfigDict(frozen=True)

    region: str
    energy_rate: float = Field(..., description="Average realized energy rate per kWh (after discount)")
    transmission_rate: float
    distribution_rate: float
    ancillary_services_rate: float
    regulatory_fees_rate: float
    total_rate: float = Field(..., description="All-in rate per kWh")


class EnergyMonth(BaseModel):
    """Operating hours and energy cost attributed to one calendar month."""

    model_config = ConfigDict(frozen=True)

    month: int = Field(..., ge=1, le=12)
    total_hours: int
    operating_hours: int
    energy_kwh: float
    energy_cost: float


class HostingEnergyResult(BaseModel):
    """Outcome of an hour-by-hour energy cost simulation."""

    model_config = ConfigDict(frozen=True)

    region: str
    load_kw: float
    total_hours: int
    operating_hours: int
    curtailed_hours: int
    total_energy_kwh: float
    total_energy_cost: float
    average_rate: float = Field(..., description="Realized all-in cost per kWh (0 when no energy used)")
    actual_uptime_percent: float
    rate_breakdown: EnergyRateBreakdown
    monthly: List[EnergyMonth] = Field(default_factory=list)


class HostingMonth(BaseModel):
    """Monthly view of the hosting business."""

    model_config = ConfigDict(frozen=True)

    month: int
    energy_kwh: float
    hosting_revenue: float
    electricity_cost: float
    operational_cost: float
    net_profit: float
    uptime_percent: float


class HostingCostAnalytics(BaseModel):
    """Cost structure and break-even figures for a hosting facility."""

    model_config = ConfigDict(frozen=True)

    break_even_hosting_rate: float = Field(..., description="Hosting fee per kWh at which net profit is zero")
    margin_of_safety: float = Field(..., description="Percent the hosting fee sits above break-even")
    energy_cost_percentage: float
    operational_cost_percentage: float
    profit_percentage: float


class HostingROIResults(BaseModel):
    """Annualized results for the hosting business model."""

    model_config = ConfigDict(frozen=True)

    assumptions_version: str
    total_energy_usage_kwh: float
    total_hosting_revenue: float
    total_electricity_cost: float
    total_operational_cost: float
    net_profit: float
    profit_margin_percent: float
    roi_12_month: float
    payback_period_years: Optional[float] = Field(
        ..., description="Years to recover infrastructure cost (None if never)"
    )
    average_uptime_percent: float
    curtailed_hours: int
    energy_rate_breakdown: EnergyRateBreakdown
    monthly_breakdown: List[HostingMonth] = Field(default_factory=list)
    cost_analytics: HostingCostAnalytics
    notes: List[str] = Field(default_factory=list)

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from roi_engine.core.config import ASSUMPTIONS_VERSION, WHOLESALE_DISCOUNT_FACTOR
from roi_engine.models.energy import RegionalEnergyCurve, RegionRateTable


AnalysisMode = Literal["self", "hosting"]


class NetworkSnapshot(BaseModel):
    """Price and network state, resolved once per calculation."""

    model_config = ConfigDict(frozen=True)

    price: float = Field(..., gt=0, description="Asset price in reporting currency")
    difficulty: float = Field(..., gt=0, description="Current network difficulty")
    network_hashrate: float = Field(..., gt=0, description="Network hashrate in H/s")
    block_reward: float = Field(default=3.125, gt=0, description="Block subsidy in BTC")
    avg_block_time_minutes: float = Field(default=10.0, gt=0, description="Average block interval")
    next_halving_days: Optional[int] = Field(default=None, ge=0, description="Days to next halving")

    @computed_field
    @property
    def blocks_per_day(self) -> float:
        """Expected blocks per day at the average block interval."""
        return 24 * 60 / self.avg_block_time_minutes


class MiningConfiguration(BaseModel):
    """Hardware and cost configuration for a mining deployment."""

    model_config = ConfigDict(frozen=True)

    miner_id: str | None = Field(
        default=None,
        description="Miner ID from library (auto-fills power and hashrate)",
    )
    hashrate_th: float = Field(..., gt=0, description="Hashrate per unit in TH/s")
    power_draw_watts: float = Field(..., gt=0, description="Power draw per unit in watts")
    units: int = Field(..., gt=0, description="Number of mining units")
    hardware_cost_per_unit: float = Field(..., ge=0, description="Purchase cost per unit")
    pool_fee_percent: float = Field(default=0.0, ge=0, lt=100, description="Pool fee, e.g. 1.5 for 1.5%")
    maintenance_percent: float = Field(
        default=0.0, ge=0, le=100, description="Annual maintenance as % of investment"
    )
    electricity_rate: Optional[float] = Field(default=None, ge=0, description="Self-mining rate per kWh")
    hosting_fee_rate: Optional[float] = Field(default=None, ge=0, description="Hosting fee per kWh")
    wholesale_electricity_rate: Optional[float] = Field(
        default=None, ge=0, description="Flat wholesale rate per kWh (hosting, no curve)"
    )
    cooling_overhead_percent: float = Field(
        default=0.0, ge=0, le=100, description="Facility overhead on top of unit power draw"
    )

    @computed_field
    @property
    def total_investment(self) -> float:
        """Hardware cost across all units."""
        return self.hardware_cost_per_unit * self.units

    @computed_field
    @property
    def total_power_kw(self) -> float:
        """Combined unit power draw in kW (excluding facility overhead)."""
        return self.power_draw_watts * self.units / 1000

    @computed_field
    @property
    def facility_power_kw(self) -> float:
        """Power draw including facility cooling overhead, in kW."""
        return self.total_power_kw * (1 + self.cooling_overhead_percent / 100)

    @computed_field
    @property
    def efficiency_w_per_th(self) -> float:
        """Energy efficiency in W per TH/s."""
        return self.power_draw_watts / self.hashrate_th


class ProjectionGrowth(BaseModel):
    """Monthly compounding growth used by the optional growth projection."""

    model_config = ConfigDict(frozen=True)

    monthly_price_growth_percent: float = Field(default=0.5, gt=-100)
    monthly_difficulty_growth_percent: float = Field(default=0.5, gt=-100)


class AnalysisRequest(BaseModel):
    """Request model for a full financial analysis."""

    assumptions_version: str | None = Field(
        default=None,
        validate_default=True,
        description="Assumptions version to use (defaults to current)",
    )
    configuration: MiningConfiguration
    snapshot: NetworkSnapshot
    mode: AnalysisMode = Field(default="self", description="Self-mining or hosted")
    region: Optional[str] = Field(
        default=None, description="Region profile for hosted energy cost (defaults to the curve's region)"
    )
    curve: Optional[RegionalEnergyCurve] = Field(
        default=None, description="Hourly wholesale curve for hosted energy cost"
    )
    growth: Optional[ProjectionGrowth] = Field(
        default=None, description="Enable compounding growth projection (default: constant snapshot)"
    )

    @field_validator("assumptions_version", mode="before")
    @classmethod
    def set_default_version(cls, v):
        """Set default assumptions version if not provided."""
        if v is None:
            return ASSUMPTIONS_VERSION
        return v

    @model_validator(mode="after")
    def check_rate_for_mode(self):
        """Each mode needs the rate it is priced on."""
        config = self.configuration
        if self.mode == "self" and config.electricity_rate is None:
            raise ValueError("electricity_rate is required for self-mining")
        if self.mode == "hosting" and (
            config.hosting_fee_rate is None
            and config.wholesale_electricity_rate is None
            and self.curve is None
        ):
            raise ValueError("hosting mode needs hosting_fee_rate, wholesale_electricity_rate or a curve")
        return self


class HostingConfiguration(BaseModel):
    """Facility configuration for the hosting business model."""

    model_config = ConfigDict(frozen=True)

    units: int = Field(..., gt=0, description="Number of hosted units")
    power_draw_watts: float = Field(..., gt=0, description="Power draw per unit in watts")
    cooling_overhead_percent: float = Field(default=10.0, ge=0, le=100)
    hosting_fee_rate: float = Field(..., gt=0, description="Fee charged to clients per kWh")
    infrastructure_cost: float = Field(..., ge=0, description="Facility build-out cost")
    monthly_overhead: float = Field(default=0.0, ge=0, description="Staff, rent, insurance per month")
    expected_uptime_percent: float = Field(default=95.0, gt=0, le=100)
    region: str = Field(default="ercot")
    custom_rate: Optional[float] = Field(
        default=None, ge=0, description="Flat energy rate per kWh when no curve is available"
    )

    @computed_field
    @property
    def facility_load_kw(self) -> float:
        """Total facility load including cooling overhead."""
        return self.power_draw_watts * self.units / 1000 * (1 + self.cooling_overhead_percent / 100)


class EnergySimulationRequest(BaseModel):
    """Request model for a standalone hosting-year energy simulation."""

    load_kw: float = Field(..., gt=0, description="Facility load in kW, overhead included")
    uptime_percent: float = Field(..., gt=0, le=100)
    region: str = Field(default="ercot")
    curve: Optional[RegionalEnergyCurve] = None
    synthetic_seed: Optional[int] = Field(
        default=None, description="Generate a synthetic curve for the region with this seed"
    )
    flat_rate: Optional[float] = Field(default=None, ge=0, description="Flat energy rate per kWh")
    discount_factor: float = Field(default=WHOLESALE_DISCOUNT_FACTOR, gt=0, le=1)
    rate_table: Optional[RegionRateTable] = Field(
        default=None, description="Override the region's fixed add-on table"
    )


class HostingAnalysisRequest(BaseModel):
    """Request model for a hosting ROI analysis."""

    assumptions_version: str | None = Field(default=None, validate_default=True)
    configuration: HostingConfiguration
    curve: Optional[RegionalEnergyCurve] = None
    synthetic_seed: Optional[int] = None
    discount_factor: float = Field(default=WHOLESALE_DISCOUNT_FACTOR, gt=0, le=1)
    rate_table: Optional[RegionRateTable] = None

    @field_validator("assumptions_version", mode="before")
    @classmethod
    def set_default_version(cls, v):
        """Set default assumptions version if not provided."""
        if v is None:
            return ASSUMPTIONS_VERSION
        return v

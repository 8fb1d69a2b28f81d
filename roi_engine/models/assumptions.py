from pydantic import BaseModel, Field

from roi_engine.core.config import (
    ANNUAL_DISCOUNT_RATE,
    ASSUMPTIONS_VERSION,
    DEFAULT_IRR_SETTINGS,
    DEPRECIATION_MONTHS,
    FINANCE_RATE,
    PROJECTION_MONTHS,
    REINVESTMENT_RATE,
    TORNADO_PERTURBATION,
    WHOLESALE_DISCOUNT_FACTOR,
    IRRSolverSettings,
)


class Assumptions(BaseModel):
    """Fixed calculation constants and their version."""

    assumptions_version: str = Field(
        default=ASSUMPTIONS_VERSION,
        description="Version identifier for the calculation methodology",
    )
    annual_discount_rate: float = Field(default=ANNUAL_DISCOUNT_RATE, description="NPV discount rate")
    finance_rate: float = Field(default=FINANCE_RATE, description="MIRR finance rate")
    reinvestment_rate: float = Field(default=REINVESTMENT_RATE, description="MIRR reinvestment rate")
    projection_months: int = Field(default=PROJECTION_MONTHS)
    depreciation_months: int = Field(default=DEPRECIATION_MONTHS, description="Straight-line life")
    wholesale_discount_factor: float = Field(
        default=WHOLESALE_DISCOUNT_FACTOR,
        description="Multiplier applied to posted wholesale prices",
    )
    tornado_perturbation: float = Field(default=TORNADO_PERTURBATION)
    irr_solver: IRRSolverSettings = Field(default=DEFAULT_IRR_SETTINGS)
    simplifications: list[str] = Field(
        default=[
            "Price and difficulty held constant over the projection unless growth is requested",
            "Transaction fees not included in revenue",
            "Halving events not modeled",
            "Depreciation is non-cash and excluded from net cash flow",
            "Risk baselines for price and difficulty are fixed",
        ],
        description="Known simplifications in the current model",
    )


def get_default_assumptions() -> Assumptions:
    """Get the default assumptions for calculations."""
    return Assumptions()

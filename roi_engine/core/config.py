import os
from typing import List

from pydantic import BaseModel, ConfigDict, Field


def get_cors_origins() -> List[str]:
    """Get CORS origins from environment and defaults."""
    default_origins = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    # Add additional origins from environment variable
    env_origins = os.getenv("CORS_ORIGINS", "")
    if env_origins:
        additional_origins = [origin.strip() for origin in env_origins.split(",") if origin.strip()]
        default_origins.extend(additional_origins)

    return default_origins


ASSUMPTIONS_VERSION = "2026.10.0"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Curve provider cache lifetime, owned by the application (not the engine)
CURVE_CACHE_TTL_SECONDS = int(os.getenv("CURVE_CACHE_TTL_SECONDS", "3600"))
CURVE_CACHE_MAX_ENTRIES = int(os.getenv("CURVE_CACHE_MAX_ENTRIES", "32"))

# Applied to curves quoted in CAD (AESO pool price) when reporting in USD
CAD_TO_USD_RATE = float(os.getenv("CAD_TO_USD_RATE", "0.73"))

# Time-value-of-money constants
ANNUAL_DISCOUNT_RATE = 0.10
FINANCE_RATE = 0.10
REINVESTMENT_RATE = 0.08

# Projection horizon and straight-line depreciation life
PROJECTION_MONTHS = 36
DEPRECIATION_MONTHS = 36

# Hosting energy model: posted wholesale price is multiplied by this factor
WHOLESALE_DISCOUNT_FACTOR = 0.4

# Tornado analysis perturbation (+/- 20%)
TORNADO_PERTURBATION = 0.20

BLOCKS_PER_DAY = 144
DAYS_PER_MONTH = 30
DAYS_PER_YEAR = 365
HOURS_PER_YEAR = 8760


class IRRSolverSettings(BaseModel):
    """
    Tunable parameters of the damped Newton-Raphson IRR solver.

    The damping factor and the clamp range are empirical stabilisers chosen
    so that the iteration does not oscillate or run away on short horizons.
    They are not derived from the underlying math.
    """

    model_config = ConfigDict(frozen=True)

    damping: float = Field(default=0.5, gt=0, le=1)
    min_rate: float = Field(default=-0.5, description="Lower clamp on the monthly rate")
    max_rate: float = Field(default=2.0, description="Upper clamp on the monthly rate")
    max_iterations: int = Field(default=200, gt=0)
    tolerance: float = Field(default=0.01, gt=0, description="Convergence threshold on |NPV|")
    min_derivative: float = Field(default=1e-10, gt=0)
    min_annual_percent: float = -100.0
    max_annual_percent: float = 1000.0


DEFAULT_IRR_SETTINGS = IRRSolverSettings()

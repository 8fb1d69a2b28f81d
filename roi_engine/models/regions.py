from typing import Literal, Optional, List

from pydantic import BaseModel, Field

from roi_engine.core.config import CAD_TO_USD_RATE
from roi_engine.core.errors import InvalidInputError
from roi_engine.models.energy import RegionRateTable


class RegionProfile(BaseModel):
    """Energy market region with its fixed delivery add-on table."""

    id: str = Field(..., description="Unique identifier")
    name: str = Field(..., description="Display name")
    currency: Literal["USD", "CAD"] = Field(..., description="Native currency of the wholesale curve")
    has_wholesale_market: bool = Field(..., description="Whether hourly wholesale curves exist")
    rate_table: RegionRateTable = Field(..., description="Fixed per-kWh add-ons in reporting currency")
    notes: str | None = Field(None, description="Additional notes")


# Add-on values are business constants; override per request with a rate table
REGION_LIBRARY: List[RegionProfile] = [
    RegionProfile(
        id="ercot",
        name="Texas (ERCOT)",
        currency="USD",
        has_wholesale_market=True,
        rate_table=RegionRateTable(
            transmission_rate=0.0045,
            distribution_rate=0.0035,
            ancillary_services_rate=0.0012,
            regulatory_fees_rate=0.0008,
        ),
        notes="Real-time settlement point prices, USD/MWh",
    ),
    RegionProfile(
        id="aeso",
        name="Alberta (AESO)",
        currency="CAD",
        has_wholesale_market=True,
        rate_table=RegionRateTable(
            transmission_rate=0.0120,
            distribution_rate=0.0040,
            ancillary_services_rate=0.0015,
            regulatory_fees_rate=0.0010,
        ),
        notes="Pool price in CAD/MWh, converted to USD",
    ),
    RegionProfile(
        id="custom",
        name="Custom flat rate",
        currency="USD",
        has_wholesale_market=False,
        rate_table=RegionRateTable(
            transmission_rate=0.0040,
            distribution_rate=0.0030,
            ancillary_services_rate=0.0010,
            regulatory_fees_rate=0.0005,
        ),
        notes="No hourly curve; a flat energy rate is supplied",
    ),
]


def get_region_by_id(region_id: str) -> Optional[RegionProfile]:
    """Retrieve a region profile from the library by ID."""
    for region in REGION_LIBRARY:
        if region.id == region_id:
            return region
    return None


def currency_conversion_factor(currency: str, reporting_currency: str = "USD") -> float:
    """Factor converting an amount in `currency` into the reporting currency."""
    if currency == reporting_currency:
        return 1.0
    if currency == "CAD" and reporting_currency == "USD":
        return CAD_TO_USD_RATE
    if currency == "USD" and reporting_currency == "CAD":
        return 1.0 / CAD_TO_USD_RATE
    raise InvalidInputError(f"No conversion from {currency} to {reporting_currency}")

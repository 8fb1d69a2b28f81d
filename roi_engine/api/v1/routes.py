"""API v1 route handlers."""

from typing import List, Optional
from fastapi import APIRouter, Request

from roi_engine.core.config import ASSUMPTIONS_VERSION
from roi_engine.models.inputs import AnalysisRequest, EnergySimulationRequest, HostingAnalysisRequest
from roi_engine.models.results import FinancialMetrics
from roi_engine.models.energy import HostingEnergyResult, HostingROIResults, RegionalEnergyCurve
from roi_engine.models.assumptions import Assumptions, get_default_assumptions
from roi_engine.models.miners import Miner, MINER_LIBRARY
from roi_engine.models.presets import Preset, PRESET_LIBRARY
from roi_engine.models.regions import RegionProfile, REGION_LIBRARY
from roi_engine.engine.calc import run_full_analysis
from roi_engine.engine.energy import simulate_hosting_year
from roi_engine.engine.hosting import run_hosting_analysis
from roi_engine.providers.curves import SyntheticCurveProvider


router = APIRouter()


def _resolve_curve(
    request: Request,
    region: str,
    curve: Optional[RegionalEnergyCurve],
    synthetic_seed: Optional[int],
) -> Optional[RegionalEnergyCurve]:
    """Inline curve if given, otherwise a synthetic one from the app's cache."""
    if curve is not None or synthetic_seed is None:
        return curve
    provider = SyntheticCurveProvider(seed=synthetic_seed, cache=request.app.state.curve_cache)
    return provider.get_curve(region)


@router.get("/presets", response_model=List[Preset])
def get_presets() -> List[Preset]:
    """Get available configuration presets."""
    return PRESET_LIBRARY


@router.get("/assumptions", response_model=Assumptions)
def get_assumptions() -> Assumptions:
    """Get current calculation assumptions and version."""
    return get_default_assumptions()


@router.get("/miners", response_model=List[Miner])
def get_miners() -> List[Miner]:
    """Get mining hardware library."""
    return MINER_LIBRARY


@router.get("/regions", response_model=List[RegionProfile])
def get_regions() -> List[RegionProfile]:
    """Get energy regions and their fixed add-on tables."""
    return REGION_LIBRARY


@router.post("/analysis", response_model=FinancialMetrics)
def analyze(payload: AnalysisRequest) -> FinancialMetrics:
    """Run the full financial analysis for a mining configuration."""
    return run_full_analysis(
        payload.configuration,
        payload.snapshot,
        payload.mode,
        region=payload.region,
        curve=payload.curve,
        growth=payload.growth,
        assumptions_version=payload.assumptions_version or ASSUMPTIONS_VERSION,
    )


@router.post("/hosting/simulate", response_model=HostingEnergyResult)
def simulate_hosting(payload: EnergySimulationRequest, request: Request) -> HostingEnergyResult:
    """
    Simulate one year of facility energy cost.

    With a curve (inline or synthetic via `synthetic_seed`), the cheapest
    hours are run up to the uptime target; otherwise `flat_rate` is applied.
    """
    curve = _resolve_curve(request, payload.region, payload.curve, payload.synthetic_seed)
    return simulate_hosting_year(
        load_kw=payload.load_kw,
        uptime_percent=payload.uptime_percent,
        region=payload.region,
        curve=curve,
        flat_rate=payload.flat_rate,
        discount_factor=payload.discount_factor,
        rate_table=payload.rate_table,
    )


@router.post("/hosting/analysis", response_model=HostingROIResults)
def analyze_hosting(payload: HostingAnalysisRequest, request: Request) -> HostingROIResults:
    """Annual ROI of the hosting business model."""
    curve = _resolve_curve(
        request, payload.configuration.region, payload.curve, payload.synthetic_seed
    )
    return run_hosting_analysis(
        payload.configuration,
        curve=curve,
        discount_factor=payload.discount_factor,
        rate_table=payload.rate_table,
        assumptions_version=payload.assumptions_version or ASSUMPTIONS_VERSION,
    )

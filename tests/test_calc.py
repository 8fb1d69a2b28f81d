"""Analysis orchestration tests."""

import pytest

from roi_engine.core.config import ASSUMPTIONS_VERSION
from roi_engine.engine.calc import resolve_effective_rate, run_full_analysis
from roi_engine.engine.energy import simulate_hosting_year
from roi_engine.models.inputs import AnalysisRequest, HostingAnalysisRequest

from conftest import make_curve


def _hosted(configuration):
    return configuration.model_copy(update={"electricity_rate": None})


def test_hosted_rate_uses_curve_region(configuration):
    """Without an explicit region the curve's own add-on table applies."""
    curve = make_curve([60.0] * 8760, region="aeso", currency="CAD")
    hosted = _hosted(configuration)

    rate = resolve_effective_rate(hosted, "hosting", curve=curve)
    aeso = simulate_hosting_year(hosted.facility_power_kw, 100, "aeso", curve=curve)
    ercot = simulate_hosting_year(hosted.facility_power_kw, 100, "ercot", curve=curve)

    assert rate == pytest.approx(aeso.average_rate)
    assert rate != pytest.approx(ercot.average_rate)


def test_explicit_region_overrides_curve_region(configuration):
    """A region named by the caller still selects the add-ons."""
    curve = make_curve([60.0] * 8760, region="aeso", currency="CAD")
    hosted = _hosted(configuration)

    rate = resolve_effective_rate(hosted, "hosting", region="ercot", curve=curve)
    ercot = simulate_hosting_year(hosted.facility_power_kw, 100, "ercot", curve=curve)
    assert rate == pytest.approx(ercot.average_rate)


def test_flat_wholesale_defaults_to_ercot(configuration):
    """Without a curve or region the flat wholesale rate uses the default region."""
    hosted = _hosted(configuration).model_copy(update={"wholesale_electricity_rate": 0.03})
    rate = resolve_effective_rate(hosted, "hosting")
    ercot = simulate_hosting_year(hosted.facility_power_kw, 100, "ercot", flat_rate=0.03)
    assert rate == pytest.approx(ercot.average_rate)


def test_full_analysis_echoes_version(configuration, snapshot):
    """The default assumptions version is carried into the result."""
    result = run_full_analysis(configuration, snapshot)
    assert result.assumptions_version == ASSUMPTIONS_VERSION


def test_request_models_default_version(configuration, snapshot):
    """Omitted assumptions versions resolve to the current version."""
    analysis = AnalysisRequest(configuration=configuration, snapshot=snapshot)
    hosting = HostingAnalysisRequest(
        configuration={
            "units": 10,
            "power_draw_watts": 3500,
            "hosting_fee_rate": 0.08,
            "infrastructure_cost": 10000.0,
            "custom_rate": 0.03,
            "region": "custom",
        }
    )
    assert analysis.assumptions_version == ASSUMPTIONS_VERSION
    assert hosting.assumptions_version == ASSUMPTIONS_VERSION

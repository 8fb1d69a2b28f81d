from pydantic import BaseModel, Field
from typing import Optional, List

from roi_engine.models.inputs import AnalysisMode, MiningConfiguration


class Preset(BaseModel):
    """Predefined analysis configuration."""

    id: str = Field(..., description="Unique identifier")
    name: str = Field(..., description="Display name")
    description: str = Field(..., description="Scenario description")
    mode: AnalysisMode = Field(..., description="Self-mining or hosted")
    region: str = Field(default="ercot")
    configuration: MiningConfiguration


PRESET_LIBRARY: List[Preset] = [
    Preset(
        id="home_miner",
        name="Home Miner",
        description="A handful of air-cooled units on a residential rate",
        mode="self",
        configuration=MiningConfiguration(
            miner_id="antminer_s21_200th_air",
            hashrate_th=200.0,
            power_draw_watts=3500,
            units=5,
            hardware_cost_per_unit=3800.0,
            pool_fee_percent=2.0,
            maintenance_percent=2.0,
            electricity_rate=0.10,
        ),
    ),
    Preset(
        id="hosted_fleet",
        name="Hosted Fleet",
        description="100 units placed with a hosting provider at an all-in fee",
        mode="hosting",
        configuration=MiningConfiguration(
            miner_id="antminer_s21_pro_234th_air",
            hashrate_th=234.0,
            power_draw_watts=3510,
            units=100,
            hardware_cost_per_unit=4900.0,
            pool_fee_percent=1.5,
            maintenance_percent=3.0,
            hosting_fee_rate=0.075,
        ),
    ),
    Preset(
        id="hydro_1mw",
        name="1 MW Hydro Facility",
        description="Self-operated hydro-cooled containers on wholesale power",
        mode="hosting",
        region="aeso",
        configuration=MiningConfiguration(
            miner_id="antminer_s21_xp_hyd_473th",
            hashrate_th=473.0,
            power_draw_watts=5676,
            units=170,
            hardware_cost_per_unit=11500.0,
            pool_fee_percent=1.5,
            maintenance_percent=5.0,
            wholesale_electricity_rate=0.045,
            cooling_overhead_percent=5.0,
        ),
    ),
]


def get_preset_by_id(preset_id: str) -> Optional[Preset]:
    """Retrieve a preset from the library by ID."""
    for preset in PRESET_LIBRARY:
        if preset.id == preset_id:
            return preset
    return None

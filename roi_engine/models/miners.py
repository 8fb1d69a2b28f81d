from pydantic import BaseModel, Field, computed_field
from typing import Literal


class Miner(BaseModel):
    """ASIC hardware specification used to auto-fill configurations."""

    id: str = Field(..., description="Unique identifier for the miner")
    name: str = Field(..., description="Display name")
    hashrate_th: float = Field(..., gt=0, description="Hashrate in TH/s")
    power_w: int = Field(..., gt=0, description="Power consumption in watts")
    cooling: Literal["air", "hydro", "immersion"] = Field(..., description="Cooling method")
    list_price: float = Field(..., ge=0, description="Indicative purchase price per unit")

    @computed_field
    @property
    def efficiency_j_th(self) -> float:
        """Energy efficiency in J/TH (joules per terahash)."""
        return self.power_w / self.hashrate_th


MINER_LIBRARY: list[Miner] = [
    Miner(
        id="antminer_s21_200th_air",
        name="Antminer S21 (200 TH/s)",
        hashrate_th=200.0,
        power_w=3500,
        cooling="air",
        list_price=3800.0,
    ),
    Miner(
        id="antminer_s21_pro_234th_air",
        name="Antminer S21 Pro (234 TH/s)",
        hashrate_th=234.0,
        power_w=3510,
        cooling="air",
        list_price=4900.0,
    ),
    Miner(
        id="antminer_s21_xp_hyd_473th",
        name="Antminer S21 XP Hyd (473 TH/s)",
        hashrate_th=473.0,
        power_w=5676,
        cooling="hydro",
        list_price=11500.0,
    ),
    Miner(
        id="whatsminer_m60_186th_air",
        name="Whatsminer M60 (186 TH/s)",
        hashrate_th=186.0,
        power_w=3422,
        cooling="air",
        list_price=3300.0,
    ),
    Miner(
        id="antminer_s19j_pro_104th_air",
        name="Antminer S19j Pro (104 TH/s)",
        hashrate_th=104.0,
        power_w=3068,
        cooling="air",
        list_price=900.0,
    ),
]


def get_miner_by_id(miner_id: str) -> Miner | None:
    """Retrieve a miner from the library by ID."""
    for miner in MINER_LIBRARY:
        if miner.id == miner_id:
            return miner
    return None

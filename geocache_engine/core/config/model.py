from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Union

from ..types import LatLng


@dataclass(frozen=True)
class WorldConfig:
    seed: Union[int, str]
    origin: LatLng
    tile_width: float
    visibility_radius: int
    spawn_chance: float
    max_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "origin": {"lat": self.origin.lat, "lng": self.origin.lng},
            "tile_width": self.tile_width,
            "visibility_radius": self.visibility_radius,
            "spawn_chance": self.spawn_chance,
            "max_count": self.max_count,
        }

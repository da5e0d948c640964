from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from ..core.types import LatLng
from ..world.cache_state import PlayerInventory


@dataclass
class Player:
    # Точка отсчета мира
    origin: LatLng

    # Смещение от origin в шагах сетки. Позиция пересчитывается от origin,
    # а не накапливается, чтобы шаг туда-обратно возвращал ровно в ту же точку.
    step_i: int = 0
    step_j: int = 0

    # Позиция от внешнего источника (геолокация); перекрывает шаги
    fixed_position: Optional[LatLng] = None

    inventory: PlayerInventory = field(default_factory=PlayerInventory)

    # История перемещений (для отрисовки пути)
    history: List[LatLng] = field(default_factory=list)

    def position(self, tile_width: float) -> LatLng:
        if self.fixed_position is not None:
            return self.fixed_position
        return self.origin.offset(self.step_i * tile_width, self.step_j * tile_width)

    def reset(self) -> None:
        self.step_i = 0
        self.step_j = 0
        self.fixed_position = None
        self.inventory.clear()
        self.history = []

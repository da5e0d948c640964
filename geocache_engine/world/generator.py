# ==============================================================================
# Файл: geocache_engine/world/generator.py
# Назначение: Детерминированный генератор тайников. Решает, есть ли тайник
#             в клетке и сколько в нем монет, только по (seed, i, j).
# ==============================================================================
from __future__ import annotations
import math
from typing import Iterable, Union

import numpy as np

from ..core.constants import COUNT_KEY_SUFFIX
from ..core.errors import ConfigurationError
from ..core.types import Cell
from ..core.utils.rng import luck


def cell_key(cell: Cell) -> str:
    return f"{cell.i},{cell.j}"


def count_key(cell: Cell) -> str:
    # Конкатенация, а не i / j: без коллизий и без деления на ноль
    return f"{cell.i},{cell.j},{COUNT_KEY_SUFFIX}"


class CacheGenerator:
    """
    Чистые функции клетки. Никакого внутреннего счетчика вызовов:
    результат не зависит от того, в каком порядке и сколько раз
    запрашивались клетки.
    """

    def __init__(self, seed: Union[int, str], spawn_chance: float, max_count: int):
        if not 0.0 <= float(spawn_chance) <= 1.0:
            raise ConfigurationError("spawn_chance must be in [0,1]")
        if int(max_count) <= 0:
            raise ConfigurationError("max_count must be > 0")

        self.seed = seed
        self.spawn_chance = float(spawn_chance)
        self.max_count = int(max_count)

    def hash(self, key: str) -> float:
        return luck(key, self.seed)

    def exists(self, cell: Cell) -> bool:
        return self.hash(cell_key(cell)) <= self.spawn_chance

    def initial_count(self, cell: Cell) -> int:
        return math.ceil(self.hash(count_key(cell)) * self.max_count)

    # --- Векторные слои для окна ---
    def spawn_mask(self, cells: Iterable[Cell]) -> np.ndarray:
        return np.fromiter((self.exists(c) for c in cells), dtype=bool)

    def count_grid(self, cells: Iterable[Cell]) -> np.ndarray:
        """Базовое количество монет; 0 там, где тайника нет."""
        return np.fromiter(
            (self.initial_count(c) if self.exists(c) else 0 for c in cells),
            dtype=np.int64,
        )

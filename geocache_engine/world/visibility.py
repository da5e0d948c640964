# ==============================================================================
# Файл: geocache_engine/world/visibility.py
# Назначение: Окно видимости вокруг игрока. На каждый пересчет - полный
#             сброс материализованных тайников и сборка заново из
#             OverrideStore или генератора.
# ==============================================================================
from __future__ import annotations
import logging
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from ..core.errors import DecodeError
from ..core.types import Cell, LatLng
from .board import Board
from .cache_state import CacheState, create_baseline
from .generator import CacheGenerator
from .override_store import OverrideStore

logger = logging.getLogger(__name__)

WindowEntry = Tuple[Cell, Optional[CacheState]]


class VisibilityWindow:
    def __init__(self, board: Board, generator: CacheGenerator, store: OverrideStore):
        self.board = board
        self.generator = generator
        self.store = store

        self.center: Optional[Cell] = None
        self.cells: List[Cell] = []
        self.materialized: Dict[Cell, CacheState] = {}
        self._teardown_listeners: List[Callable[[Cell, CacheState], None]] = []

    def add_teardown_listener(self, callback: Callable[[Cell, CacheState], None]) -> None:
        """Колбэк вызывается для каждого тайника, который выбрасывается из окна."""
        self._teardown_listeners.append(callback)

    def cache_at(self, cell: Cell) -> Optional[CacheState]:
        return self.materialized.get(cell)

    def teardown(self) -> None:
        for cell, cache in self.materialized.items():
            for callback in self._teardown_listeners:
                callback(cell, cache)
        self.materialized = {}
        self.cells = []

    def _materialize(self, cell: Cell) -> CacheState:
        cache = self.store.restore(cell, self.board.canonicalize)
        if cache is None:
            return create_baseline(cell, self.generator)
        if cache.cell is not None and cache.cell != cell:
            raise DecodeError(
                f"Snapshot stored for ({cell.i},{cell.j}) belongs to "
                f"({cache.cell.i},{cache.cell.j})"
            )
        cache.cell = cell
        return cache

    def recompute(self, position: LatLng) -> List[WindowEntry]:
        """
        Пересчитывает окно вокруг position.
        Возвращает пары (клетка, тайник или None) в построчном порядке.
        Старое окно сбрасывается только после успешной сборки нового:
        при DecodeError прежнее окно остается на месте.
        """
        cells = self.board.cells_near(position, self.board.tile_visibility_radius)
        entries: List[WindowEntry] = []
        materialized: Dict[Cell, CacheState] = {}
        for cell in cells:
            if not self.generator.exists(cell):
                entries.append((cell, None))
                continue
            cache = self._materialize(cell)
            materialized[cell] = cache
            entries.append((cell, cache))

        self.teardown()
        self.center = self.board.cell_for_point(position)
        self.cells = cells
        self.materialized = materialized
        logger.debug(
            "Window recomputed around (%d,%d): %d cells, %d caches",
            self.center.i, self.center.j, len(cells), len(materialized),
        )
        return entries

    def layers(self) -> Dict[str, np.ndarray]:
        """
        Слои текущего окна в виде квадратных numpy-сеток (2r x 2r):
        exists - есть ли тайник, baseline - число монет при генерации,
        count - текущее число монет, override - есть ли запись в OverrideStore.
        Строка 0 - самая южная полоса окна.
        """
        size = 2 * self.board.tile_visibility_radius
        if not self.cells:
            return {
                "exists": np.zeros((0, 0), dtype=bool),
                "baseline": np.zeros((0, 0), dtype=np.int64),
                "count": np.zeros((0, 0), dtype=np.int64),
                "override": np.zeros((0, 0), dtype=bool),
            }

        exists = self.generator.spawn_mask(self.cells)
        baseline = self.generator.count_grid(self.cells)
        count = np.fromiter(
            (len(self.materialized[c]) if c in self.materialized else 0 for c in self.cells),
            dtype=np.int64,
        )
        override = np.fromiter(
            (c in self.materialized and c in self.store for c in self.cells), dtype=bool
        )
        return {
            "exists": exists.reshape(size, size),
            "baseline": baseline.reshape(size, size),
            "count": count.reshape(size, size),
            "override": override.reshape(size, size),
        }

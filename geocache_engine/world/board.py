# ==============================================================================
# Файл: geocache_engine/world/board.py
# Назначение: Сетка мира. Каноничные клетки (flyweight), перевод позиции
#             в клетку и перечисление клеток в окне видимости.
# ==============================================================================
from __future__ import annotations
import math
from typing import Dict, List, Tuple

import numpy as np

from ..core.errors import ConfigurationError
from ..core.types import Cell, CellBounds, LatLng


class Board:
    def __init__(self, tile_width: float, tile_visibility_radius: int):
        if not tile_width > 0:
            raise ConfigurationError("tile_width must be > 0")
        if int(tile_visibility_radius) <= 0:
            raise ConfigurationError("tile_visibility_radius must be > 0")

        self.tile_width = float(tile_width)
        self.tile_visibility_radius = int(tile_visibility_radius)
        # Реестр растет весь сеанс и никогда не очищается
        self._known_cells: Dict[Tuple[int, int], Cell] = {}

    @property
    def known_cells(self) -> int:
        return len(self._known_cells)

    def canonicalize(self, i: int, j: int) -> Cell:
        """Возвращает единственный экземпляр Cell для (i, j), регистрируя его при первом запросе."""
        key = (int(i), int(j))
        cell = self._known_cells.get(key)
        if cell is None:
            cell = Cell(*key)
            self._known_cells[key] = cell
        return cell

    def cell_for_point(self, point: LatLng) -> Cell:
        return self.canonicalize(
            math.floor(point.lat / self.tile_width),
            math.floor(point.lng / self.tile_width),
        )

    def cell_bounds(self, cell: Cell) -> CellBounds:
        south = cell.i * self.tile_width
        west = cell.j * self.tile_width
        return CellBounds(
            south=south,
            west=west,
            north=south + self.tile_width,
            east=west + self.tile_width,
        )

    def cell_center(self, cell: Cell) -> LatLng:
        return LatLng(
            (cell.i + 0.5) * self.tile_width,
            (cell.j + 0.5) * self.tile_width,
        )

    @staticmethod
    def window_offsets(radius: int) -> Tuple[np.ndarray, np.ndarray]:
        """
        Смещения (di, dj) квадратного окна [-radius, radius) по обеим осям.
        Порядок построчный: di - внешний цикл, dj - внутренний.
        """
        span = np.arange(-radius, radius, dtype=np.int64)
        di, dj = np.meshgrid(span, span, indexing="ij")
        return di.ravel(), dj.ravel()

    def cells_near(self, point: LatLng, radius: int | None = None) -> List[Cell]:
        if radius is None:
            radius = self.tile_visibility_radius
        origin = self.cell_for_point(point)
        di, dj = self.window_offsets(int(radius))
        return [
            self.canonicalize(origin.i + int(a), origin.j + int(b))
            for a, b in zip(di, dj)
        ]

    @staticmethod
    def is_cell_next_to(cell_a: Cell, cell_b: Cell) -> bool:
        """Соседство по 8 направлениям; клетка не соседствует сама с собой."""
        di = abs(cell_a.i - cell_b.i)
        dj = abs(cell_a.j - cell_b.j)
        return max(di, dj) == 1

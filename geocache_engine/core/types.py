# geocache_engine/core/types.py
from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Cell:
    """Клетка сетки мира. Сравнивается и хешируется по (i, j)."""

    i: int
    j: int


@dataclass(frozen=True)
class LatLng:
    """Непрерывная позиция игрока (широта / долгота)."""

    lat: float
    lng: float

    def offset(self, dlat: float, dlng: float) -> "LatLng":
        return LatLng(self.lat + dlat, self.lng + dlng)


@dataclass(frozen=True)
class CellBounds:
    """Прямоугольник, который занимает одна клетка в непрерывных координатах."""

    south: float
    west: float
    north: float
    east: float

    def contains(self, point: LatLng) -> bool:
        return self.south <= point.lat < self.north and self.west <= point.lng < self.east


@dataclass(frozen=True)
class ResourceUnit:
    """
    Монета. Идентичность = (клетка происхождения, порядковый номер).
    Создается только генератором при первом создании тайника.
    """

    origin: Cell
    serial: int

    def __str__(self) -> str:
        return f"{self.origin.i}:{self.origin.j}#{self.serial}"

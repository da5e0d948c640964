# ==============================================================================
# Файл: geocache_engine/world/cache_state.py
# Назначение: Содержимое тайника (стек монет), инвентарь игрока и
#             единственная мутирующая операция - перенос монеты.
# ==============================================================================
from __future__ import annotations
import logging
from typing import Callable, Iterator, List, Optional, Tuple

from ..core.types import Cell, ResourceUnit
from .generator import CacheGenerator
from .serialization import decode_snapshot, encode_snapshot

logger = logging.getLogger(__name__)


class CacheState:
    """Упорядоченный набор монет, LIFO: переносится всегда последняя добавленная."""

    def __init__(self, cell: Optional[Cell] = None, units: Optional[List[ResourceUnit]] = None):
        self.cell = cell
        self._units: List[ResourceUnit] = list(units or [])

    def __len__(self) -> int:
        return len(self._units)

    def __iter__(self) -> Iterator[ResourceUnit]:
        return iter(tuple(self._units))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(cell={self.cell!r}, units={len(self._units)})"

    @property
    def units(self) -> Tuple[ResourceUnit, ...]:
        return tuple(self._units)

    def is_empty(self) -> bool:
        return not self._units

    def peek(self) -> Optional[ResourceUnit]:
        return self._units[-1] if self._units else None

    def labels(self) -> List[str]:
        return [str(u) for u in self._units]

    def to_snapshot(self) -> str:
        return encode_snapshot(self.cell, self._units)

    # Только transfer() имеет право трогать стек
    def _pop(self) -> ResourceUnit:
        return self._units.pop()

    def _push(self, unit: ResourceUnit) -> None:
        self._units.append(unit)


class PlayerInventory(CacheState):
    """Инвентарь игрока: не привязан к клетке и не попадает в OverrideStore."""

    def __init__(self, units: Optional[List[ResourceUnit]] = None):
        super().__init__(cell=None, units=units)

    def clear(self) -> None:
        self._units.clear()


def create_baseline(cell: Cell, generator: CacheGenerator) -> CacheState:
    count = generator.initial_count(cell)
    return CacheState(cell, [ResourceUnit(cell, serial) for serial in range(count)])


def restore(snapshot: str, canonicalize: Optional[Callable[[int, int], Cell]] = None) -> CacheState:
    """
    Восстанавливает тайник из снапшота. При порче бросает DecodeError.
    canonicalize позволяет вернуть клетки из реестра доски, а не новые копии.
    """
    contract = decode_snapshot(snapshot)
    make_cell = canonicalize or Cell

    cell = make_cell(*contract.cell) if contract.cell is not None else None
    units = [ResourceUnit(make_cell(i, j), serial) for i, j, serial in contract.units]
    return CacheState(cell, units)


def transfer(source: CacheState, target: CacheState) -> bool:
    """
    Переносит верхнюю монету из source в target.
    Пустой source - обычная ситуация: ничего не делаем, возвращаем False.
    """
    if source is target or source.is_empty():
        return False
    unit = source._pop()
    target._push(unit)
    logger.debug("Transferred %s: %r -> %r", unit, source, target)
    return True

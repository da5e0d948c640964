# ==============================================================================
# Файл: geocache_engine/world/override_store.py
# Назначение: Разреженное хранилище изменений. Хранит снапшоты только тех
#             клеток, чьи тайники игрок менял. Ключ - значение (i, j).
# ==============================================================================
from __future__ import annotations
import logging
from typing import Callable, Dict, List, Optional, Tuple

from ..core.types import Cell
from .cache_state import CacheState, restore

logger = logging.getLogger(__name__)


class OverrideStore:
    def __init__(self):
        # Ключ по значению, а не по идентичности объекта Cell:
        # две равные клетки всегда попадают в одну запись.
        self._snapshots: Dict[Tuple[int, int], str] = {}

    def __len__(self) -> int:
        return len(self._snapshots)

    def __contains__(self, cell: Cell) -> bool:
        return (cell.i, cell.j) in self._snapshots

    def put(self, cell: Cell, cache: CacheState) -> None:
        """Полная перезапись записи клетки (last-writer-wins)."""
        self._snapshots[(cell.i, cell.j)] = cache.to_snapshot()
        logger.debug("Override stored for cell (%d,%d): %d units", cell.i, cell.j, len(cache))

    def get(self, cell: Cell) -> Optional[str]:
        return self._snapshots.get((cell.i, cell.j))

    def restore(
        self, cell: Cell, canonicalize: Optional[Callable[[int, int], Cell]] = None
    ) -> Optional[CacheState]:
        snapshot = self.get(cell)
        if snapshot is None:
            return None
        return restore(snapshot, canonicalize)

    def cells(self) -> List[Tuple[int, int]]:
        return list(self._snapshots.keys())

    def clear(self) -> None:
        logger.debug("Override store cleared (%d entries)", len(self._snapshots))
        self._snapshots.clear()

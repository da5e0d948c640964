# ==============================================================================
# Файл: geocache_engine/game_logic/world.py
# Назначение: GameWorld - объект-контекст сеанса. Владеет доской, генератором,
#             хранилищем изменений, окном видимости и игроком. Все внешние
#             действия (шаг, сбор/вклад монеты, сброс) идут через него.
# ==============================================================================
from __future__ import annotations
import logging
import threading
from typing import Any, Dict, List, Optional

from ..core.config import WorldConfig, load_config
from ..core.constants import DIRECTION_STEPS, TRANSFER_COLLECT, TRANSFER_DEPOSIT
from ..core.types import Cell, LatLng
from ..world.board import Board
from ..world.cache_state import CacheState, transfer
from ..world.generator import CacheGenerator
from ..world.override_store import OverrideStore
from ..world.visibility import VisibilityWindow, WindowEntry
from .player import Player

logger = logging.getLogger(__name__)


class GameWorld:
    def __init__(self, config: Optional[WorldConfig] = None):
        self.config = config or load_config()

        self.board = Board(self.config.tile_width, self.config.visibility_radius)
        self.generator = CacheGenerator(
            self.config.seed, self.config.spawn_chance, self.config.max_count
        )
        self.store = OverrideStore()
        self.window = VisibilityWindow(self.board, self.generator, self.store)
        self.player = Player(origin=self.config.origin)

        # Перенос + запись снапшота должны быть видны как одно действие
        self._lock = threading.RLock()
        self.last_entries: List[WindowEntry] = []

        logger.info(
            "GameWorld created: seed=%r, tile_width=%s, radius=%d",
            self.config.seed, self.config.tile_width, self.config.visibility_radius,
        )
        self.recompute()

    # --- Позиция игрока ---
    @property
    def player_position(self) -> LatLng:
        return self.player.position(self.config.tile_width)

    @property
    def player_cell(self) -> Cell:
        return self.board.cell_for_point(self.player_position)

    def recompute(self, position: Optional[LatLng] = None) -> List[WindowEntry]:
        with self._lock:
            if position is None:
                position = self.player_position
            self.last_entries = self.window.recompute(position)
            return self.last_entries

    def move_player(self, direction: str) -> List[WindowEntry]:
        """Шаг на одну клетку: north / south / east / west."""
        if direction not in DIRECTION_STEPS:
            raise ValueError(f"Unknown direction '{direction}', expected one of {sorted(DIRECTION_STEPS)}")
        di, dj = DIRECTION_STEPS[direction]
        tw = self.config.tile_width
        with self._lock:
            player = self.player
            if player.fixed_position is not None:
                target = player.fixed_position.offset(di * tw, dj * tw)
            else:
                target = player.origin.offset((player.step_i + di) * tw, (player.step_j + dj) * tw)

            # Игрок меняется только после успешного пересчета окна
            entries = self.recompute(target)
            player.history.append(self.player_position)
            if player.fixed_position is not None:
                player.fixed_position = target
            else:
                player.step_i += di
                player.step_j += dj
            logger.debug("Player moved %s to %s", direction, self.player_position)
            return entries

    def set_player_position(self, position: LatLng) -> List[WindowEntry]:
        """Вход для внешнего источника позиции (геолокация)."""
        with self._lock:
            entries = self.recompute(position)
            self.player.history.append(self.player_position)
            self.player.fixed_position = position
            return entries

    # --- Перенос монет ---
    def cache_at(self, cell: Cell) -> Optional[CacheState]:
        return self.window.cache_at(cell)

    def transfer(self, direction: str, cell: Cell) -> bool:
        """
        collect: тайник -> игрок, deposit: игрок -> тайник.
        False, если тайник не в окне или источник пуст.
        """
        if direction not in (TRANSFER_COLLECT, TRANSFER_DEPOSIT):
            raise ValueError(f"Unknown transfer direction '{direction}'")

        with self._lock:
            cache = self.window.cache_at(cell)
            if cache is None:
                logger.debug("Transfer %s ignored: no visible cache at (%d,%d)", direction, cell.i, cell.j)
                return False

            inventory = self.player.inventory
            if direction == TRANSFER_COLLECT:
                moved = transfer(cache, inventory)
            else:
                moved = transfer(inventory, cache)

            if moved:
                self.store.put(cell, cache)
            return moved

    # --- Сброс прогресса ---
    def reset(self) -> List[WindowEntry]:
        with self._lock:
            logger.info("Resetting world progress (%d overrides dropped)", len(self.store))
            self.store.clear()
            self.player.reset()
            return self.recompute(self.config.origin)

    def get_render_state(self) -> Dict[str, Any]:
        cell = self.player_cell
        return {
            "player_position": self.player_position,
            "player_cell": cell,
            "player_coins": self.player.inventory.labels(),
            "history": list(self.player.history),
            "caches": {c: cache.labels() for c, cache in self.window.materialized.items()},
            "layers": self.window.layers(),
            "overrides": len(self.store),
            "known_cells": self.board.known_cells,
        }

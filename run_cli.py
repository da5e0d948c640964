# ==============================================================================
# Файл: run_cli.py
# Назначение: Консольный клиент для ручной проверки мира тайников.
#             Рисует окно видимости символами и принимает команды.
# ==============================================================================
from __future__ import annotations
import logging
import sys
import traceback
from typing import List

import numpy as np

from geocache_engine.core.config import load_config
from geocache_engine.core.constants import (
    DIRECTION_STEPS, GLYPH_CACHE, GLYPH_EMPTY, GLYPH_OVERRIDE, GLYPH_PLAYER,
    TRANSFER_DIRECTIONS,
)
from geocache_engine.core.errors import CacheEngineError
from geocache_engine.game_logic.world import GameWorld
from geocache_engine.setup_logging import setup_logging

HELP_TEXT = """Commands:
  n / s / e / w            step one tile north / south / east / west
  collect <di> <dj>        take a coin from the cache at offset (di, dj) from you
  deposit <di> <dj>        put a coin into the cache at offset (di, dj)
  caches                   list visible caches
  inv                      show your coins
  reset                    forget all progress and return to the origin
  q                        quit"""

_SHORT_DIRECTIONS = {"n": "north", "s": "south", "e": "east", "w": "west"}


def render_window(world: GameWorld) -> str:
    layers = world.window.layers()
    grid = np.full(layers["exists"].shape, GLYPH_EMPTY, dtype="<U1")
    grid[layers["exists"]] = GLYPH_CACHE
    grid[layers["override"]] = GLYPH_OVERRIDE

    radius = world.board.tile_visibility_radius
    center = world.window.center
    player = world.player_cell
    pi, pj = player.i - center.i + radius, player.j - center.j + radius
    if 0 <= pi < grid.shape[0] and 0 <= pj < grid.shape[1]:
        grid[pi, pj] = GLYPH_PLAYER

    # Север сверху
    return "\n".join(" ".join(row) for row in grid[::-1])


def list_caches(world: GameWorld) -> List[str]:
    player = world.player_cell
    lines = []
    for cell, cache in sorted(world.window.materialized.items(), key=lambda kv: (kv[0].i, kv[0].j)):
        lines.append(
            f"  ({cell.i - player.i:+d},{cell.j - player.j:+d}) cell {cell.i}:{cell.j} "
            f"coins={len(cache)} top={cache.peek()}"
        )
    return lines


def handle_command(world: GameWorld, line: str) -> bool:
    parts = line.strip().split()
    if not parts:
        return True
    cmd = parts[0].lower()

    if cmd in ("q", "quit", "exit"):
        return False
    if cmd in _SHORT_DIRECTIONS or cmd in DIRECTION_STEPS:
        world.move_player(_SHORT_DIRECTIONS.get(cmd, cmd))
        print(render_window(world))
    elif cmd in TRANSFER_DIRECTIONS:
        if len(parts) != 3:
            print(f"Usage: {cmd} <di> <dj>")
            return True
        try:
            di, dj = int(parts[1]), int(parts[2])
        except ValueError:
            print("Offsets must be integers.")
            return True
        player = world.player_cell
        cell = world.board.canonicalize(player.i + di, player.j + dj)
        if world.transfer(cmd, cell):
            cache = world.cache_at(cell)
            print(f"OK. Cache now has {len(cache)} coins, you have {len(world.player.inventory)}.")
        else:
            print("Nothing to transfer.")
    elif cmd == "caches":
        print("\n".join(list_caches(world)) or "  no caches in sight")
    elif cmd == "inv":
        coins = world.player.inventory.labels()
        print(f"Coins ({len(coins)}): {', '.join(coins) or '-'}")
    elif cmd == "reset":
        world.reset()
        print("Progress reset.")
        print(render_window(world))
    elif cmd in ("h", "help", "?"):
        print(HELP_TEXT)
    else:
        print(f"Unknown command '{cmd}'. Type 'help'.")
    return True


def main(argv: List[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    setup_logging(logging.WARNING)

    try:
        config = load_config(argv[0] if argv else None)
    except CacheEngineError as e:
        print(f"!!! ERROR: {e}")
        return 2

    world = GameWorld(config)
    print(f"--- Geocache world (seed={config.seed!r}) ---")
    print(HELP_TEXT)
    print(render_window(world))

    while True:
        try:
            line = input(">>> ")
        except EOFError:
            break
        try:
            if not handle_command(world, line):
                break
        except CacheEngineError as e:
            print(f"!!! ERROR: {type(e).__name__}: {e}")
            traceback.print_exc()
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

# ========================
# file: geocache_engine/core/config/defaults.py
# ========================
from __future__ import annotations
from typing import Any, Dict

# Базовый мир: Санта-Крус, клетка ~ 0.0001 градуса.
DEFAULT_WORLD_CONFIG: Dict[str, Any] = {
    "seed": "SEED",
    "origin": {"lat": 36.9895, "lng": -122.0628},
    "tile_width": 1e-4,
    "visibility_radius": 8,
    "spawn_chance": 0.1,
    "max_count": 10,
}

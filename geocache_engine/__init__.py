# ========================
# file: geocache_engine/__init__.py
# ========================
from .core.errors import CacheEngineError, ConfigurationError, DecodeError
from .core.types import Cell, CellBounds, LatLng, ResourceUnit
from .core.config import WorldConfig, load_config
from .game_logic.world import GameWorld

__all__ = [
    "CacheEngineError",
    "ConfigurationError",
    "DecodeError",
    "Cell",
    "CellBounds",
    "LatLng",
    "ResourceUnit",
    "WorldConfig",
    "load_config",
    "GameWorld",
]

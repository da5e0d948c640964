# ========================
# file: geocache_engine/core/config/__init__.py
# ========================
from .model import WorldConfig
from .loader import load_config, deep_merge
from .defaults import DEFAULT_WORLD_CONFIG

__all__ = [
    "WorldConfig",
    "load_config",
    "deep_merge",
    "DEFAULT_WORLD_CONFIG",
]

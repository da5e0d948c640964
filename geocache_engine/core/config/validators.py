# ========================
# file: geocache_engine/core/config/validators.py
# ========================
from __future__ import annotations
import math
from typing import Any, Dict
from ..errors import ConfigurationError


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ConfigurationError(msg)


def _as_float(cfg: Dict[str, Any], key: str) -> float:
    try:
        value = float(cfg.get(key))
    except (TypeError, ValueError):
        raise ConfigurationError(f"{key} must be a number") from None
    _require(math.isfinite(value), f"{key} must be finite")
    return value


def _as_int(cfg: Dict[str, Any], key: str) -> int:
    value = cfg.get(key)
    _require(
        isinstance(value, int) and not isinstance(value, bool),
        f"{key} must be an integer",
    )
    return value


def validate_dict(cfg: Dict[str, Any]) -> None:
    """Validate a merged world config dict.

    Raises ConfigurationError on the first failing check.
    """
    seed = cfg.get("seed")
    _require(
        (isinstance(seed, str) and seed != "")
        or (isinstance(seed, int) and not isinstance(seed, bool)),
        "seed must be a non-empty string or an integer",
    )

    origin = cfg.get("origin")
    _require(isinstance(origin, dict), "origin must be a mapping with lat/lng")
    _as_float(origin, "lat")
    _as_float(origin, "lng")

    _require(_as_float(cfg, "tile_width") > 0.0, "tile_width must be > 0")
    _require(_as_int(cfg, "visibility_radius") > 0, "visibility_radius must be > 0")

    chance = _as_float(cfg, "spawn_chance")
    _require(0.0 <= chance <= 1.0, "spawn_chance must be in [0,1]")

    _require(_as_int(cfg, "max_count") > 0, "max_count must be > 0")

# ========================
# file: geocache_engine/core/config/loader.py
# ========================
from __future__ import annotations
import os
import json
import copy
import logging
from typing import Any, Dict, Mapping, Union

from ..errors import ConfigurationError
from ..types import LatLng
from .defaults import DEFAULT_WORLD_CONFIG
from .model import WorldConfig
from .validators import validate_dict

logger = logging.getLogger(__name__)

SEED_ENV_VAR = "GEOCACHE_SEED"


def deep_merge(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursive dict merge. Lists/tuples are replaced, not merged element-wise."""
    out = copy.deepcopy(base)
    for k, v in overrides.items():
        if isinstance(v, Mapping) and isinstance(out.get(k), dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = copy.deepcopy(v)
    return out


def _load_json_file(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Config file '{path}' is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file '{path}' must contain a JSON object")
    return data


def load_config(
    source: Union[str, Dict[str, Any], None] = None,
    overrides: Mapping[str, Any] | None = None,
) -> WorldConfig:
    """Load a world config from a JSON path or dict, merge with defaults and apply overrides.

    Args:
        source: file path to JSON, or raw dict, or None for pure defaults
        overrides: mapping of ad-hoc overrides (last layer)
    Returns:
        WorldConfig (immutable dataclass) ready for use
    """
    if source is None:
        data: Dict[str, Any] = {}
    elif isinstance(source, str):
        if not os.path.isfile(source):
            raise ConfigurationError(f"Config file '{source}' not found")
        data = _load_json_file(source)
    elif isinstance(source, dict):
        data = source
    else:
        raise TypeError("source must be str path, dict or None")

    merged = deep_merge(DEFAULT_WORLD_CONFIG, data)

    # Сид из окружения перекрывает файл, но не явные overrides
    env_seed = os.getenv(SEED_ENV_VAR)
    if env_seed:
        merged["seed"] = env_seed
    if overrides:
        merged = deep_merge(merged, overrides)

    validate_dict(merged)

    config = WorldConfig(
        seed=merged["seed"],
        origin=LatLng(float(merged["origin"]["lat"]), float(merged["origin"]["lng"])),
        tile_width=float(merged["tile_width"]),
        visibility_radius=int(merged["visibility_radius"]),
        spawn_chance=float(merged["spawn_chance"]),
        max_count=int(merged["max_count"]),
    )
    logger.debug("World config loaded: %s", config.to_dict())
    return config

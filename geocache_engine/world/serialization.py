# Файл: geocache_engine/world/serialization.py
from __future__ import annotations
import dataclasses
import json
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple

from ..core.constants import SNAPSHOT_VERSION
from ..core.errors import DecodeError
from ..core.types import Cell, ResourceUnit


# --- Контракт снапшота тайника ---
@dataclass
class CacheSnapshotContract:
    """
    Структура сериализованного тайника в OverrideStore.
    units - список [i, j, serial] в порядке добавления (последний = верх стека).
    """

    version: str = SNAPSHOT_VERSION
    cell: Optional[Tuple[int, int]] = None
    units: List[Tuple[int, int, int]] = field(default_factory=list)


def encode_snapshot(cell: Optional[Cell], units: Sequence[ResourceUnit]) -> str:
    contract = CacheSnapshotContract(
        cell=(cell.i, cell.j) if cell is not None else None,
        units=[(u.origin.i, u.origin.j, u.serial) for u in units],
    )
    return json.dumps(dataclasses.asdict(contract), separators=(",", ":"))


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def decode_snapshot(snapshot: str) -> CacheSnapshotContract:
    """Разбирает снапшот. Любая порча данных -> DecodeError, ничего не теряем молча."""
    if not isinstance(snapshot, (str, bytes, bytearray)):
        raise DecodeError(f"Snapshot must be text, got {type(snapshot).__name__}")
    try:
        data = json.loads(snapshot)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"Snapshot is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise DecodeError("Snapshot must be a JSON object")
    if data.get("version") != SNAPSHOT_VERSION:
        raise DecodeError(f"Unsupported snapshot version: {data.get('version')!r}")

    raw_cell = data.get("cell")
    cell: Optional[Tuple[int, int]] = None
    if raw_cell is not None:
        if not (isinstance(raw_cell, list) and len(raw_cell) == 2 and all(map(_is_int, raw_cell))):
            raise DecodeError(f"Malformed snapshot cell: {raw_cell!r}")
        cell = (raw_cell[0], raw_cell[1])

    raw_units = data.get("units")
    if not isinstance(raw_units, list):
        raise DecodeError("Snapshot units must be a list")

    units: List[Tuple[int, int, int]] = []
    seen = set()
    for idx, entry in enumerate(raw_units):
        if not (isinstance(entry, list) and len(entry) == 3 and all(map(_is_int, entry))):
            raise DecodeError(f"Malformed unit at index {idx}: {entry!r}")
        if entry[2] < 0:
            raise DecodeError(f"Negative unit serial at index {idx}: {entry!r}")
        unit = (entry[0], entry[1], entry[2])
        if unit in seen:
            raise DecodeError(f"Duplicate unit at index {idx}: {entry!r}")
        seen.add(unit)
        units.append(unit)

    return CacheSnapshotContract(version=SNAPSHOT_VERSION, cell=cell, units=units)

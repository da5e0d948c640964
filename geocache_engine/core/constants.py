# ==============================================================================
# Файл: geocache_engine/core/constants.py
# Назначение: Глобальные константы движка (направления, версии снапшотов,
#             ключи генератора).
# ==============================================================================
from __future__ import annotations
from typing import Dict, Tuple

# =======================================================================
# ДВИЖЕНИЕ ИГРОКА
# =======================================================================

# Шаг в клетках (di, dj): i растет по широте (на север), j по долготе (на восток)
DIRECTION_STEPS: Dict[str, Tuple[int, int]] = {
    "north": (1, 0),
    "south": (-1, 0),
    "east": (0, 1),
    "west": (0, -1),
}

# =======================================================================
# ПЕРЕНОС РЕСУРСОВ
# =======================================================================

TRANSFER_COLLECT = "collect"  # тайник -> игрок
TRANSFER_DEPOSIT = "deposit"  # игрок -> тайник
TRANSFER_DIRECTIONS = (TRANSFER_COLLECT, TRANSFER_DEPOSIT)

# =======================================================================
# ГЕНЕРАТОР И СНАПШОТЫ
# =======================================================================

# Суффикс ключа для количества монет. Ключ собирается конкатенацией,
# а не делением i / j (деление даёт коллизии и падает при j == 0).
COUNT_KEY_SUFFIX = "initialValue"

SNAPSHOT_VERSION = "cache_v1"

# Символы текстового слоя окна (используются CLI-клиентом)
GLYPH_EMPTY = "."
GLYPH_CACHE = "o"
GLYPH_OVERRIDE = "*"
GLYPH_PLAYER = "@"

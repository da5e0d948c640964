# geocache_engine/core/utils/rng.py
from __future__ import annotations
from typing import Union

_MASK64 = 0xFFFFFFFFFFFFFFFF

# FNV-1a 64
_FNV_OFFSET = 0xcbf29ce484222325
_FNV_PRIME = 0x100000001B3


def _splitmix64(x: int) -> int:
    x = (x + 0x9E3779B97F4A7C15) & _MASK64
    z = x
    z = (z ^ (z >> 30)) * 0xBF58476D1CE4E5B9 & _MASK64
    z = (z ^ (z >> 27)) * 0x94D049BB133111EB & _MASK64
    return z ^ (z >> 31)


def seed_from_any(x: Union[int, str, bytes]) -> int:
    if isinstance(x, bool):
        raise TypeError("Unsupported seed type")
    if isinstance(x, int):
        return x & _MASK64
    if isinstance(x, bytes):
        acc = _FNV_OFFSET
        for b in x:
            acc ^= b
            acc = (acc * _FNV_PRIME) & _MASK64
        return acc
    if isinstance(x, str):
        return seed_from_any(x.encode('utf-8'))
    raise TypeError("Unsupported seed type")


def hash64(*vals: int) -> int:
    h = 0x84222325CBF29CE4
    for v in vals:
        h ^= v & _MASK64
        h = _splitmix64(h)
    return h


def luck(key: str, seed: Union[int, str] = "") -> float:
    """
    Детерминированное "случайное" число в [0, 1) для строкового ключа.

    Чистая функция: одинаковые (seed, key) всегда дают одинаковый результат,
    независимо от порядка и количества предыдущих вызовов. Встроенный hash()
    не используется, т.к. он солится на каждый процесс.
    """
    h = hash64(seed_from_any(f"{seed}|{key}"))
    # Старшие 53 бита -> мантисса double
    return (h >> 11) * (1.0 / (1 << 53))

# ========================
# file: geocache_engine/core/errors.py
# ========================
class CacheEngineError(Exception):
    """Base error for the cache engine."""


class ConfigurationError(CacheEngineError):
    """Raised when a world config fails validation."""


class DecodeError(CacheEngineError):
    """Raised when a stored cache snapshot cannot be parsed."""

"""In-memory TTL cache for App Service Environment lookups."""

from __future__ import annotations

import time

# Several plans usually share one environment; a short TTL keeps a single
# audit run from fetching it once per plan.
_ENVIRONMENT_CACHE_TTL = 300  # 5 minutes
_environment_cache: dict[str, tuple[float, dict]] = {}


def _cached(key: str, ttl: int = _ENVIRONMENT_CACHE_TTL) -> dict | None:
    """Return cached value if still valid, else ``None``."""
    entry = _environment_cache.get(key.lower())
    if entry is not None:
        ts, data = entry
        if time.monotonic() - ts < ttl:
            return data
    return None


def _cache_set(key: str, data: dict) -> None:
    """Store an environment payload in the cache."""
    _environment_cache[key.lower()] = (time.monotonic(), data)

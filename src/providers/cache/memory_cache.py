"""In-memory cache provider using cachetools.TLRUCache.

Simple, fast cache suitable for development and single-process deployments.
Unlike a plain ``TTLCache`` the TLRU variant computes an expiry per entry,
so the search (2 min) and detail (3 min) TTLs are honoured side by side.
Swap for :class:`RedisCacheProvider` when several API replicas should share
one cache.
"""

from __future__ import annotations

import time
from typing import Any

import structlog
from cachetools import TLRUCache

from src.interfaces.cache_provider import ICacheProvider

logger = structlog.get_logger(logger_name=__name__)


def _entry_expiry(_key: str, entry: tuple[Any, float], now: float) -> float:
    # TLRUCache calls this on insert; the entry carries its own TTL.
    return now + entry[1]


class MemoryCacheProvider(ICacheProvider):
    """In-memory TTL cache backed by ``cachetools.TLRUCache``.

    Parameters
    ----------
    max_size:
        Maximum number of entries before the least-recently-used entry
        is evicted.
    ttl:
        Default time-to-live in seconds, used when ``set`` gets no TTL.
    timer:
        Clock used for expiry; injectable for tests.
    """

    def __init__(self, max_size: int = 1024, ttl: int = 300, timer=time.monotonic) -> None:  # noqa: ANN001
        self._default_ttl = ttl
        self._cache: TLRUCache[str, tuple[Any, float]] = TLRUCache(
            maxsize=max_size, ttu=_entry_expiry, timer=timer
        )

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    async def get(self, key: str) -> Any | None:
        """Retrieve the cached value for *key*, or ``None`` if missing/expired."""
        entry = self._cache.get(key)
        if entry is None:
            logger.debug("cache_miss", key=key)
            return None
        logger.debug("cache_hit", key=key)
        return entry[0]

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store *value* under *key* for *ttl* seconds (default TTL if ``None``)."""
        effective_ttl = self._default_ttl if ttl is None else ttl
        self._cache[key] = (value, float(effective_ttl))
        logger.debug("cache_set", key=key, ttl=effective_ttl)

    async def delete(self, key: str) -> None:
        """Remove *key* from the cache (no-op if absent)."""
        self._cache.pop(key, None)
        logger.debug("cache_delete", key=key)

    async def exists(self, key: str) -> bool:
        """Return ``True`` if *key* is present and not expired."""
        return key in self._cache

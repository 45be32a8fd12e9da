"""Abstract base class for cache providers.

The discovery service keeps assembled views (search pages, program pages,
episode pages) in a key-value side-cache in front of the document store.
Values are the views' JSON wire dicts, so any backend that can hold JSON
with a per-key expiry qualifies.

Any method may raise :class:`~src.utils.errors.CacheError`.  The service
reads a failed ``get`` as a miss and drops a failed ``set``; a broken cache
therefore costs latency, never a failed request.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


# Concrete implementations: MemoryCacheProvider, RedisCacheProvider (src/providers/cache/)
class ICacheProvider(ABC):
    """Contract for the view cache."""

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the value stored under *key*, or ``None`` on a miss or after expiry."""

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store the JSON-compatible *value* under *key*, replacing any previous entry.

        Parameters
        ----------
        ttl:
            Seconds until the entry expires.  ``None`` uses the provider's
            default.  Overwriting a key restarts its expiry.
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Drop *key*; deleting an absent key is not an error."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Return ``True`` if *key* holds an unexpired entry."""

    async def close(self) -> None:
        """Release connections; a no-op for in-process caches."""

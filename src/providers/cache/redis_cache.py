"""Redis-backed cache provider using ``redis.asyncio``.

Shared by every API replica, so a view cached by one worker is served by
all of them until its TTL lapses.  Values are stored as JSON text with a
per-key expiry (``SET key value EX ttl``).

Every Redis or serialisation failure is re-raised as
:class:`~src.utils.errors.CacheError`; the discovery service decides what
a cache failure means (a miss, or a dropped write).
"""

from __future__ import annotations

import json
from typing import Any

import structlog
from redis import asyncio as aioredis
from redis.exceptions import RedisError

from src.interfaces.cache_provider import ICacheProvider
from src.utils.errors import CacheError

logger = structlog.get_logger(logger_name=__name__)

_PROVIDER_NAME = "redis"


class RedisCacheProvider(ICacheProvider):
    """JSON-over-Redis implementation of :class:`ICacheProvider`.

    Parameters
    ----------
    client:
        An ``redis.asyncio.Redis`` client.  Use :meth:`from_settings` to
        build one from host/port/password/TLS options.
    default_ttl:
        Expiry in seconds used when ``set`` gets no TTL.
    """

    def __init__(self, client: aioredis.Redis, default_ttl: int = 300) -> None:
        self._client = client
        self._default_ttl = default_ttl

    @classmethod
    def from_settings(
        cls,
        host: str,
        port: int,
        password: str = "",
        use_tls: bool = False,
        default_ttl: int = 300,
    ) -> RedisCacheProvider:
        """Build a provider with its own connection pool (DB 0)."""
        client = aioredis.Redis(
            host=host,
            port=port,
            password=password or None,
            db=0,
            ssl=use_tls,
            decode_responses=True,
        )
        return cls(client=client, default_ttl=default_ttl)

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    async def get(self, key: str) -> Any | None:
        try:
            raw = await self._client.get(key)
        except RedisError as exc:
            raise CacheError(f"GET {key} failed: {exc}", provider_name=_PROVIDER_NAME) from exc

        if raw is None:
            logger.debug("cache_miss", key=key)
            return None

        try:
            value = json.loads(raw)
        except (TypeError, ValueError) as exc:
            raise CacheError(
                f"Cached value for {key} is not valid JSON", provider_name=_PROVIDER_NAME
            ) from exc
        logger.debug("cache_hit", key=key)
        return value

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        effective_ttl = self._default_ttl if ttl is None else ttl
        try:
            payload = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError) as exc:
            raise CacheError(
                f"Value for {key} is not JSON serialisable", provider_name=_PROVIDER_NAME
            ) from exc

        try:
            await self._client.set(key, payload, ex=effective_ttl)
        except RedisError as exc:
            raise CacheError(f"SET {key} failed: {exc}", provider_name=_PROVIDER_NAME) from exc
        logger.debug("cache_set", key=key, ttl=effective_ttl)

    async def delete(self, key: str) -> None:
        try:
            await self._client.delete(key)
        except RedisError as exc:
            raise CacheError(f"DEL {key} failed: {exc}", provider_name=_PROVIDER_NAME) from exc
        logger.debug("cache_delete", key=key)

    async def exists(self, key: str) -> bool:
        try:
            return bool(await self._client.exists(key))
        except RedisError as exc:
            raise CacheError(f"EXISTS {key} failed: {exc}", provider_name=_PROVIDER_NAME) from exc

    async def close(self) -> None:
        await self._client.aclose()

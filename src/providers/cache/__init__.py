"""Cache providers.

Side-cache backends for the discovery service's cache-aside reads.

MemoryCacheProvider is an in-process TTL map, fast but not shared across
processes.  RedisCacheProvider is the shared backend for multi-replica
deployments.  Both implement ICacheProvider, so the service never knows
which one it talks to.
"""

from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.cache.redis_cache import RedisCacheProvider

__all__ = ["MemoryCacheProvider", "RedisCacheProvider"]

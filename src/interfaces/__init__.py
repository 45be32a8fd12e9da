"""Public interface definitions for the Discovery API's collaborators.

The discovery service reaches the search backend and the cache exclusively
through the abstract base classes defined in this package.  Concrete
adapters implement them and are injected at startup in ``src/main.py``, so
unit tests can hand the service in-memory fakes instead of live services.

CONCRETE PROVIDER MAP:
    Interface          →  Concrete implementations (in src/providers/)
    ─────────────────────────────────────────────────────────────────
    IDocumentStore     →  ElasticsearchStoreProvider
    ICacheProvider     →  RedisCacheProvider, MemoryCacheProvider

Re-exports
----------
IDocumentStore, RawHit
    Search-backend contract and the collection-tagged hit it returns.
ICacheProvider
    Key-value cache contract.
"""

from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.document_store import IDocumentStore, RawHit

__all__ = [
    "ICacheProvider",
    "IDocumentStore",
    "RawHit",
]

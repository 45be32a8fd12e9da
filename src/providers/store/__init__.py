"""Document store providers.

ElasticsearchStoreProvider talks to an Elasticsearch or OpenSearch cluster
over its REST API and implements IDocumentStore.
"""

from src.providers.store.elasticsearch_provider import ElasticsearchStoreProvider

__all__ = ["ElasticsearchStoreProvider"]

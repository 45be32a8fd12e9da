"""Elasticsearch/OpenSearch document store over the REST API.

Talks to the ``_search`` and ``_doc`` endpoints with an injected
``httpx.AsyncClient``; no Elasticsearch SDK is involved.  The cluster holds
two collections written by the ingestion system:

* ``programs`` -- one document per program, keyed by program id
* ``episodes`` -- one document per episode, keyed by episode id, with a
  ``programId`` keyword field

The combined programs+episodes search skips a missing collection
(``ignore_unavailable``) instead of failing the whole request.  A 404 from
a search means the collection does not exist yet and yields an empty
result.  A 404 from a lookup means the document does not exist and raises
:class:`NotFoundError`.  Everything else that is not a 2xx becomes a
:class:`StoreError`; this layer never retries.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from src.interfaces.document_store import IDocumentStore, RawHit
from src.utils.errors import DecodeError, NotFoundError, StoreError
from src.utils.logging import get_logger

_PROVIDER_NAME = "elasticsearch"

DEFAULT_PROGRAMS_COLLECTION = "programs"
DEFAULT_EPISODES_COLLECTION = "episodes"

# Title matches weigh twice as much as description matches.
_SEARCH_FIELDS = ["title^2", "description"]

_MULTI_INDEX_PARAMS = {"ignore_unavailable": "true", "allow_no_indices": "true"}


def build_search_query(
    query: str,
    category: str,
    language: str,
    offset: int,
    limit: int,
) -> dict[str, Any]:
    """Build the bool query for a multi-collection search.

    Full-text ``multi_match`` when *query* is non-empty, ``match_all``
    otherwise, AND-combined with a ``term`` filter per non-empty filter.
    """
    if query:
        must: list[dict[str, Any]] = [
            {
                "multi_match": {
                    "query": query,
                    "fields": list(_SEARCH_FIELDS),
                    "type": "best_fields",
                }
            }
        ]
    else:
        must = [{"match_all": {}}]

    filters: list[dict[str, Any]] = []
    if category:
        filters.append({"term": {"category": category}})
    if language:
        filters.append({"term": {"language": language}})

    return {
        "query": {"bool": {"must": must, "filter": filters}},
        "from": offset,
        "size": limit,
        "track_total_hits": True,
    }


def build_episodes_query(program_id: str, size: int, offset: int) -> dict[str, Any]:
    """Build the query for one window of a program's episodes.

    Season-less episodes sort before every numbered season.
    """
    return {
        "query": {"term": {"programId": program_id}},
        "from": offset,
        "size": size,
        "sort": [
            {"seasonNumber": {"order": "asc", "missing": "_first"}},
            {"episodeNumber": {"order": "asc"}},
        ],
    }


class ElasticsearchStoreProvider(IDocumentStore):
    """REST adapter implementing :class:`IDocumentStore`.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient`` for testability and connection pooling.
    base_url:
        Cluster endpoint, e.g. ``http://localhost:9200``.
    programs_collection, episodes_collection:
        Index names of the two collections.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str,
        programs_collection: str = DEFAULT_PROGRAMS_COLLECTION,
        episodes_collection: str = DEFAULT_EPISODES_COLLECTION,
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._programs = programs_collection
        self._episodes = episodes_collection
        self._logger = get_logger(__name__)

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME

    @property
    def programs_collection(self) -> str:
        return self._programs

    @property
    def episodes_collection(self) -> str:
        return self._episodes

    # ------------------------------------------------------------------
    # IDocumentStore implementation
    # ------------------------------------------------------------------

    async def search_multi_index(
        self,
        query: str,
        category: str,
        language: str,
        offset: int,
        limit: int,
    ) -> tuple[list[RawHit], int]:
        body = build_search_query(query, category, language, offset, limit)
        payload = await self._search(
            f"{self._programs},{self._episodes}", body, params=_MULTI_INDEX_PARAMS
        )
        if payload is None:
            return [], 0

        hits_section = payload.get("hits") or {}
        hits = [
            RawHit(collection=hit.get("_index", ""), body=self._source_of(hit))
            for hit in hits_section.get("hits") or []
        ]
        return hits, self._total_of(hits_section)

    async def get_program(self, program_id: str) -> dict[str, Any]:
        return await self._get_document(self._programs, program_id, kind="program")

    async def get_episode(self, episode_id: str) -> dict[str, Any]:
        return await self._get_document(self._episodes, episode_id, kind="episode")

    async def get_episodes_by_program_id(
        self,
        program_id: str,
        size: int,
        offset: int,
    ) -> list[dict[str, Any]]:
        body = build_episodes_query(program_id, size, offset)
        payload = await self._search(self._episodes, body)
        if payload is None:
            return []
        hits_section = payload.get("hits") or {}
        return [self._source_of(hit) for hit in hits_section.get("hits") or []]

    async def close(self) -> None:
        await self._http.aclose()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _search(
        self,
        collections: str,
        body: dict[str, Any],
        params: dict[str, str] | None = None,
    ) -> dict[str, Any] | None:
        """POST a search body; ``None`` when the collection does not exist."""
        url = f"{self._base_url}/{collections}/_search"
        try:
            response = await self._http.post(url, json=body, params=params)
        except httpx.HTTPError as exc:
            self._logger.warning("store_request_failed", url=url, error=str(exc))
            raise StoreError(f"Search request failed: {exc}", provider_name=_PROVIDER_NAME) from exc

        if response.status_code == 404:
            self._logger.info("store_collection_missing", collections=collections)
            return None
        self._raise_for_status(response)
        return self._json_of(response)

    async def _get_document(self, collection: str, doc_id: str, kind: str) -> dict[str, Any]:
        url = f"{self._base_url}/{collection}/_doc/{quote(doc_id, safe='')}"
        try:
            response = await self._http.get(url)
        except httpx.HTTPError as exc:
            self._logger.warning("store_request_failed", url=url, error=str(exc))
            raise StoreError(f"Lookup of {kind} {doc_id} failed: {exc}", provider_name=_PROVIDER_NAME) from exc

        if response.status_code == 404:
            raise NotFoundError(f"{kind} not found: {doc_id}", provider_name=_PROVIDER_NAME)
        self._raise_for_status(response)

        payload = self._json_of(response)
        if payload.get("found") is False:
            raise NotFoundError(f"{kind} not found: {doc_id}", provider_name=_PROVIDER_NAME)
        return self._source_of(payload)

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return
        raise StoreError(
            f"Elasticsearch error: HTTP {response.status_code}",
            provider_name=_PROVIDER_NAME,
        )

    @staticmethod
    def _json_of(response: httpx.Response) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError as exc:
            raise DecodeError("Response body is not valid JSON", provider_name=_PROVIDER_NAME) from exc
        if not isinstance(payload, dict):
            raise DecodeError("Response body is not a JSON object", provider_name=_PROVIDER_NAME)
        return payload

    @staticmethod
    def _source_of(hit: dict[str, Any]) -> dict[str, Any]:
        source = hit.get("_source")
        if not isinstance(source, dict):
            raise DecodeError("Document has no _source object", provider_name=_PROVIDER_NAME)
        return source

    @staticmethod
    def _total_of(hits_section: dict[str, Any]) -> int:
        total = hits_section.get("total", 0)
        # ES 7+ reports {"value": n, "relation": "eq"}; older clusters a bare int.
        if isinstance(total, dict):
            return int(total.get("value", 0))
        return int(total)

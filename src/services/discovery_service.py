"""Query orchestration for the discovery read API.

:class:`DiscoveryService` implements the three read operations (search,
program detail, episode detail) on top of an :class:`IDocumentStore` and an
optional :class:`ICacheProvider`.

Every operation follows the same cache-aside contract:

1. derive a key from the normalized inputs;
2. look the key up -- a hit is returned as-is and the store is never called;
3. on a miss (or any cache error) compute the view from the store;
4. write the view back with the operation's TTL, dropping any write error.

The cache can never fail a request.  Store failures are not retried here.
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.document_store import IDocumentStore
from src.models.catalog import RawEpisode, RawProgram
from src.models.views import (
    EpisodeDetail,
    EpisodeSummary,
    ProgramDetail,
    ProgramSummary,
    SearchResult,
    to_wire,
)
from src.services.result_normalizer import PROGRAMS_COLLECTION, decode_document, normalize_hits
from src.utils.concurrency import gather_or_cancel
from src.utils.errors import InvalidRequestError, NotFoundError, StoreError
from src.utils.logging import get_logger
from src.utils.pagination import (
    DEFAULT_EPISODE_SIZE,
    DEFAULT_SEARCH_SIZE,
    normalize_page,
    normalize_size,
    page_offset,
)

SEARCH_CACHE_TTL_SECONDS = 120  # 2 minutes
DETAIL_CACHE_TTL_SECONDS = 180  # 3 minutes

_V = TypeVar("_V", bound=BaseModel)


# ---------------------------------------------------------------------------
# Cache keys
# ---------------------------------------------------------------------------

def _cache_key(prefix: str, *parts: Any) -> str:
    # JSON-encoding the parts keeps keys unambiguous when values contain "|".
    return f"{prefix}|{json.dumps(list(parts), ensure_ascii=False, separators=(',', ':'))}"


def search_cache_key(query: str, category: str, language: str, page: int, limit: int) -> str:
    """Exact-match key over all five search inputs, empty filters included."""
    return _cache_key("search", query, category, language, page, limit)


def program_cache_key(program_id: str, episode_page: int, episode_size: int) -> str:
    """Key for one program page; each episode window is cached separately."""
    return _cache_key("program", program_id, episode_page, episode_size)


def episode_cache_key(episode_id: str) -> str:
    return _cache_key("episode", episode_id)


# ---------------------------------------------------------------------------
# View assembly
# ---------------------------------------------------------------------------

def _episode_summary(episode: RawEpisode) -> EpisodeSummary:
    return EpisodeSummary(
        id=episode.id,
        title=episode.title,
        thumbnail_url=episode.thumbnail_url,
        video_url=episode.video_url,
        duration_in_seconds=episode.duration_in_seconds,
        episode_number=episode.episode_number,
        season_number=episode.season_number,
        publication_date=episode.publication_date,
    )


def _program_detail(program: RawProgram, episodes: list[RawEpisode]) -> ProgramDetail:
    return ProgramDetail(
        id=program.id,
        title=program.title,
        description=program.description,
        type=program.type,
        category=program.category,
        language=program.language,
        cover_image_url=program.cover_image_url,
        extra_info=program.extra_info,
        episodes=[_episode_summary(e) for e in episodes],
    )


def _episode_detail(episode: RawEpisode, program: ProgramSummary) -> EpisodeDetail:
    return EpisodeDetail(
        id=episode.id,
        title=episode.title,
        description=episode.description,
        video_url=episode.video_url,
        thumbnail_url=episode.thumbnail_url,
        duration_in_seconds=episode.duration_in_seconds,
        episode_number=episode.episode_number,
        season_number=episode.season_number,
        publication_date=episode.publication_date,
        extra_info=episode.extra_info,
        program=program,
    )


class DiscoveryService:
    """Cache-aside read operations over the program and episode collections.

    Parameters
    ----------
    store:
        The document store holding both collections.
    cache:
        Side-cache for assembled views.  ``None`` disables caching.
    programs_collection:
        Collection name that identifies program hits in search results.
    include_video_url_in_search:
        Whether episode search items expose ``videoUrl``.
    """

    def __init__(
        self,
        store: IDocumentStore,
        cache: ICacheProvider | None = None,
        *,
        programs_collection: str = PROGRAMS_COLLECTION,
        include_video_url_in_search: bool = False,
    ) -> None:
        self._store = store
        self._cache = cache
        self._programs_collection = programs_collection
        self._include_video_url = include_video_url_in_search
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # -- Public API -----------------------------------------------------------

    async def search(
        self,
        query: str = "",
        category: str = "",
        language: str = "",
        page: int | None = 1,
        limit: int | None = DEFAULT_SEARCH_SIZE,
    ) -> SearchResult:
        """Search programs and episodes together.

        Out-of-range *page*/*limit* are clamped (page to 1, limit to 10)
        before they reach the cache key or the store.
        """
        query = query or ""
        category = category or ""
        language = language or ""
        page = normalize_page(page)
        limit = normalize_size(limit, DEFAULT_SEARCH_SIZE)

        key = search_cache_key(query, category, language, page, limit)
        cached = await self._cache_get(key, SearchResult)
        if cached is not None:
            return cached

        hits, total = await self._store.search_multi_index(
            query, category, language, page_offset(page, limit), limit
        )
        items = normalize_hits(
            hits,
            programs_collection=self._programs_collection,
            include_video_url=self._include_video_url,
        )
        result = SearchResult(items=items, total=total, page=page, limit=limit)

        await self._cache_set(key, result, SEARCH_CACHE_TTL_SECONDS)
        return result

    async def get_program(
        self,
        program_id: str,
        episode_page: int | None = 1,
        episode_size: int | None = DEFAULT_EPISODE_SIZE,
    ) -> ProgramDetail:
        """Return a program with one page of its episodes.

        The program and its episode window are fetched concurrently; the
        first failure cancels the other fetch.  :class:`NotFoundError` is
        raised only when the program itself does not exist.
        """
        if not program_id:
            raise InvalidRequestError("program id is required")
        episode_page = normalize_page(episode_page)
        episode_size = normalize_size(episode_size, DEFAULT_EPISODE_SIZE)

        key = program_cache_key(program_id, episode_page, episode_size)
        cached = await self._cache_get(key, ProgramDetail)
        if cached is not None:
            return cached

        raw_program, raw_episodes = await gather_or_cancel(
            self._store.get_program(program_id),
            self._fetch_episodes(program_id, episode_size, page_offset(episode_page, episode_size)),
        )

        program = decode_document(RawProgram, raw_program)
        episodes = [decode_document(RawEpisode, body) for body in raw_episodes]
        detail = _program_detail(program, episodes)

        await self._cache_set(key, detail, DETAIL_CACHE_TTL_SECONDS)
        return detail

    async def get_episode(self, episode_id: str) -> EpisodeDetail:
        """Return an episode with a summary of its parent program.

        A missing episode raises :class:`NotFoundError` without looking up
        the parent.  A parent that cannot be loaded degrades to an empty
        :class:`ProgramSummary`.
        """
        if not episode_id:
            raise InvalidRequestError("episode id is required")

        key = episode_cache_key(episode_id)
        cached = await self._cache_get(key, EpisodeDetail)
        if cached is not None:
            return cached

        episode = decode_document(RawEpisode, await self._store.get_episode(episode_id))
        program = await self._load_program_summary(episode.program_id)
        detail = _episode_detail(episode, program)

        await self._cache_set(key, detail, DETAIL_CACHE_TTL_SECONDS)
        return detail

    # -- Sub-fetches ------------------------------------------------------------

    async def _fetch_episodes(self, program_id: str, size: int, offset: int) -> list[dict[str, Any]]:
        """Episode-window fetch whose failures can never read as "program not found"."""
        try:
            return await self._store.get_episodes_by_program_id(program_id, size, offset)
        except NotFoundError as exc:
            raise StoreError(
                f"Episode listing for program {program_id} failed: {exc.message}",
                provider_name=exc.provider_name,
            ) from exc

    async def _load_program_summary(self, program_id: str) -> ProgramSummary:
        if not program_id:
            return ProgramSummary()
        try:
            program = decode_document(RawProgram, await self._store.get_program(program_id))
        except Exception as exc:
            self._logger.warning(
                "parent_program_lookup_failed",
                program_id=program_id,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return ProgramSummary()
        return ProgramSummary(
            id=program.id,
            title=program.title,
            cover_image_url=program.cover_image_url,
        )

    # -- Cache helpers ---------------------------------------------------------

    async def _cache_get(self, key: str, model: type[_V]) -> _V | None:
        """Return the cached view for *key*; errors and stale shapes count as misses."""
        if self._cache is None:
            return None
        try:
            payload = await self._cache.get(key)
        except Exception as exc:
            self._logger.warning("cache_read_failed", key=key, error=str(exc))
            return None
        if payload is None:
            self._logger.debug("cache_miss", key=key)
            return None
        try:
            view = model.model_validate(payload)
        except ValidationError as exc:
            self._logger.warning("cache_payload_invalid", key=key, errors=exc.error_count())
            return None
        self._logger.debug("cache_hit", key=key)
        return view

    async def _cache_set(self, key: str, view: BaseModel, ttl: int) -> None:
        """Best-effort write: failures are logged and dropped, never retried."""
        if self._cache is None:
            return
        try:
            await self._cache.set(key, to_wire(view), ttl=ttl)
        except Exception as exc:
            self._logger.warning("cache_write_failed", key=key, error=str(exc))

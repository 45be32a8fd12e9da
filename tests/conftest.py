"""Shared pytest fixtures for the discovery test suite."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.document_store import IDocumentStore, RawHit
from src.utils.errors import CacheError, NotFoundError

# ---------------------------------------------------------------------------
# Sample documents
# ---------------------------------------------------------------------------


def make_program(program_id: str = "prog-1", **overrides: Any) -> dict[str, Any]:
    """Return a raw program document as the ingestion system indexes it."""
    doc: dict[str, Any] = {
        "id": program_id,
        "title": "فنجان",
        "description": "Long-form conversations",
        "type": "podcast",
        "category": "Culture",
        "language": "ar",
        "coverImageUrl": f"https://cdn.example.com/{program_id}/cover.jpg",
        "extraInfo": {"host": "Abdulrahman", "tags": ["talk", "culture"], "rating": 4.5},
        "createdAt": "2024-01-01T00:00:00Z",
        "updatedAt": "2024-02-01T00:00:00Z",
    }
    doc.update(overrides)
    return doc


def make_episode(
    episode_id: str = "ep-1",
    program_id: str = "prog-1",
    season: int | None = 1,
    number: int = 1,
    **overrides: Any,
) -> dict[str, Any]:
    """Return a raw episode document as the ingestion system indexes it."""
    doc: dict[str, Any] = {
        "id": episode_id,
        "programId": program_id,
        "title": f"Episode {number}",
        "description": "An episode",
        "durationInSeconds": 3600,
        "publicationDate": "2024-03-01T10:00:00Z",
        "videoUrl": f"https://cdn.example.com/{episode_id}/video.m3u8",
        "thumbnailUrl": f"https://cdn.example.com/{episode_id}/thumb.jpg",
        "status": "published",
        "episodeNumber": number,
        "seasonNumber": season,
        "extraInfo": {"guests": ["Guest A"]},
        "createdAt": "2024-01-01T00:00:00Z",
        "updatedAt": "2024-02-01T00:00:00Z",
    }
    doc.update(overrides)
    return doc


def _episode_sort_key(doc: dict[str, Any]) -> tuple[int, int, int]:
    season = doc.get("seasonNumber")
    # Season-less episodes first, matching the Elasticsearch sort.
    return (0 if season is None else 1, season or 0, doc["episodeNumber"])


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeDocumentStore(IDocumentStore):
    """In-memory IDocumentStore that records every call it receives.

    ``failures`` maps a method name to an exception raised on every call;
    ``delays`` maps a method name to seconds slept before answering.
    """

    def __init__(
        self,
        programs: list[dict[str, Any]] | None = None,
        episodes: list[dict[str, Any]] | None = None,
        search_hits: list[RawHit] | None = None,
        search_total: int | None = None,
    ) -> None:
        self.programs = {p["id"]: p for p in programs or []}
        self.episodes = {e["id"]: e for e in episodes or []}
        self.search_hits = search_hits or []
        self.search_total = search_total
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.failures: dict[str, BaseException] = {}
        self.delays: dict[str, float] = {}
        self.cancelled: list[str] = []

    def calls_to(self, method: str) -> list[tuple[Any, ...]]:
        return [args for name, args in self.calls if name == method]

    async def _enter(self, method: str, *args: Any) -> None:
        self.calls.append((method, args))
        try:
            if method in self.delays:
                await asyncio.sleep(self.delays[method])
        except asyncio.CancelledError:
            self.cancelled.append(method)
            raise
        if method in self.failures:
            raise self.failures[method]

    async def search_multi_index(self, query, category, language, offset, limit):  # noqa: ANN001, ANN201
        await self._enter("search_multi_index", query, category, language, offset, limit)
        total = self.search_total if self.search_total is not None else len(self.search_hits)
        return list(self.search_hits), total

    async def get_program(self, program_id):  # noqa: ANN001, ANN201
        await self._enter("get_program", program_id)
        if program_id not in self.programs:
            raise NotFoundError(f"program not found: {program_id}")
        return self.programs[program_id]

    async def get_episode(self, episode_id):  # noqa: ANN001, ANN201
        await self._enter("get_episode", episode_id)
        if episode_id not in self.episodes:
            raise NotFoundError(f"episode not found: {episode_id}")
        return self.episodes[episode_id]

    async def get_episodes_by_program_id(self, program_id, size, offset):  # noqa: ANN001, ANN201
        await self._enter("get_episodes_by_program_id", program_id, size, offset)
        matching = sorted(
            (e for e in self.episodes.values() if e["programId"] == program_id),
            key=_episode_sort_key,
        )
        return matching[offset : offset + size]

    def get_provider_name(self) -> str:
        return "fake"


class ExplodingStore(IDocumentStore):
    """A store that fails the test if anything touches it."""

    def _boom(self, method: str) -> None:
        raise AssertionError(f"store.{method} must not be called")

    async def search_multi_index(self, *args, **kwargs):  # noqa: ANN002, ANN003, ANN201
        self._boom("search_multi_index")

    async def get_program(self, *args, **kwargs):  # noqa: ANN002, ANN003, ANN201
        self._boom("get_program")

    async def get_episode(self, *args, **kwargs):  # noqa: ANN002, ANN003, ANN201
        self._boom("get_episode")

    async def get_episodes_by_program_id(self, *args, **kwargs):  # noqa: ANN002, ANN003, ANN201
        self._boom("get_episodes_by_program_id")

    def get_provider_name(self) -> str:
        return "exploding"


class DictCache(ICacheProvider):
    """Plain dict cache that remembers the TTL of every write."""

    def __init__(self) -> None:
        self.data: dict[str, Any] = {}
        self.ttls: dict[str, int | None] = {}

    async def get(self, key: str) -> Any | None:
        return self.data.get(key)

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        self.data[key] = value
        self.ttls[key] = ttl

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)

    async def exists(self, key: str) -> bool:
        return key in self.data


class FaultyCache(ICacheProvider):
    """A cache whose every operation raises."""

    def __init__(self) -> None:
        self.get_attempts = 0
        self.set_attempts = 0

    async def get(self, key: str) -> Any | None:
        self.get_attempts += 1
        raise CacheError("connection refused", provider_name="redis")

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        self.set_attempts += 1
        raise CacheError("connection refused", provider_name="redis")

    async def delete(self, key: str) -> None:
        raise CacheError("connection refused", provider_name="redis")

    async def exists(self, key: str) -> bool:
        raise CacheError("connection refused", provider_name="redis")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_program() -> dict[str, Any]:
    return make_program()


@pytest.fixture
def sample_episodes() -> list[dict[str, Any]]:
    """Three episodes of prog-1 stored out of order: (1,2), (1,1), (2,1)."""
    return [
        make_episode("ep-12", season=1, number=2),
        make_episode("ep-11", season=1, number=1),
        make_episode("ep-21", season=2, number=1),
    ]


@pytest.fixture
def fake_store(sample_program, sample_episodes) -> FakeDocumentStore:  # noqa: ANN001
    return FakeDocumentStore(programs=[sample_program], episodes=sample_episodes)


@pytest.fixture
def dict_cache() -> DictCache:
    return DictCache()


@pytest.fixture
def faulty_cache() -> FaultyCache:
    return FaultyCache()

"""Abstract base class for document-store providers.

Defines the contract for the search backend that holds the program and
episode collections.  Implementations may wrap Elasticsearch, OpenSearch,
or any engine that supports multi-collection full-text search and lookups
by id.  The discovery service only sees raw JSON bodies; decoding them
into typed models is its job, not the store's.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RawHit:
    """A single multi-collection search hit.

    Attributes
    ----------
    collection:
        Name of the collection (index) the document came from.
    body:
        The raw document as stored, before any decoding.
    """

    collection: str
    body: dict[str, Any] = field(default_factory=dict)


# Concrete implementation: ElasticsearchStoreProvider (src/providers/store/)
class IDocumentStore(ABC):
    """Contract for the read side of the catalog search backend."""

    @abstractmethod
    async def search_multi_index(
        self,
        query: str,
        category: str,
        language: str,
        offset: int,
        limit: int,
    ) -> tuple[list[RawHit], int]:
        """Search programs and episodes together.

        Parameters
        ----------
        query:
            Free text matched against title and description.  Empty means
            match everything.
        category, language:
            Exact-match filters; empty strings are not applied.
        offset, limit:
            Result window.

        Returns
        -------
        tuple[list[RawHit], int]
            Hits in relevance order, and the total number of matches
            regardless of the window.  ``([], 0)`` when the collections do
            not exist yet.

        Raises
        ------
        StoreError
            On transport or backend failure.
        """

    @abstractmethod
    async def get_program(self, program_id: str) -> dict[str, Any]:
        """Return the raw program document for *program_id*.

        Raises
        ------
        NotFoundError
            When no such program exists.
        StoreError
            On any other failure.
        """

    @abstractmethod
    async def get_episode(self, episode_id: str) -> dict[str, Any]:
        """Return the raw episode document for *episode_id*.

        Same error contract as :meth:`get_program`.
        """

    @abstractmethod
    async def get_episodes_by_program_id(
        self,
        program_id: str,
        size: int,
        offset: int,
    ) -> list[dict[str, Any]]:
        """Return one window of a program's episodes.

        Episodes are sorted by season number then episode number, both
        ascending, with season-less episodes first.  An absent episodes
        collection yields an empty list.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this store (e.g. ``"elasticsearch"``)."""

    async def close(self) -> None:
        """Release any network resources held by the store."""

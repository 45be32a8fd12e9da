"""Discovery domain models, re-exported from one place.

The models are organized by which side of the service they sit on:
    - catalog.py: raw program/episode documents as stored in the search backend
    - views.py:   public projections returned by the API and stored in the cache
"""

from __future__ import annotations

from src.models.catalog import ProgramType, RawEpisode, RawProgram
from src.models.views import (
    EpisodeDetail,
    EpisodeSearchItem,
    EpisodeSummary,
    ProgramDetail,
    ProgramSearchItem,
    ProgramSummary,
    SearchItem,
    SearchResult,
    to_wire,
)

__all__ = [
    "EpisodeDetail",
    "EpisodeSearchItem",
    "EpisodeSummary",
    "ProgramDetail",
    "ProgramSearchItem",
    "ProgramSummary",
    "ProgramType",
    "RawEpisode",
    "RawProgram",
    "SearchItem",
    "SearchResult",
    "to_wire",
]

"""Public, API-shaped projections of catalog documents.

Search results are a tagged union: :class:`ProgramSearchItem` and
:class:`EpisodeSearchItem` each carry only the fields relevant to their
variant, discriminated by ``type``.  On the wire the union flattens to a
single object per item with absent fields omitted (never ``null``); see
:func:`to_wire`.

All views serialize by their camelCase alias, which is the JSON contract
consumed by clients and the shape stored in the cache.
"""

from __future__ import annotations

import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from src.models.catalog import ProgramType

_VIEW_CONFIG = ConfigDict(frozen=True, populate_by_name=True)


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

class ProgramSearchItem(BaseModel):
    """A program card in the unified search results."""

    model_config = _VIEW_CONFIG

    type: Literal["program"] = "program"
    id: str
    title: str
    description: str | None = None
    extra_info: Any = Field(default=None, alias="extraInfo")
    program_type: ProgramType = Field(alias="programType")
    category: str
    language: str
    cover_image_url: str | None = Field(default=None, alias="coverImageUrl")


class EpisodeSearchItem(BaseModel):
    """An episode card in the unified search results."""

    model_config = _VIEW_CONFIG

    type: Literal["episode"] = "episode"
    id: str
    title: str
    description: str | None = None
    extra_info: Any = Field(default=None, alias="extraInfo")
    program_id: str = Field(alias="programId")
    thumbnail_url: str | None = Field(default=None, alias="thumbnailUrl")
    # Only populated when search results are configured to expose video URLs.
    video_url: str | None = Field(default=None, alias="videoUrl")
    duration_in_seconds: int = Field(alias="durationInSeconds")
    episode_number: int = Field(alias="episodeNumber")
    season_number: int | None = Field(default=None, alias="seasonNumber")
    publication_date: datetime.datetime | None = Field(default=None, alias="publicationDate")


SearchItem = Annotated[
    Union[ProgramSearchItem, EpisodeSearchItem],  # noqa: UP007
    Field(discriminator="type"),
]


class SearchResult(BaseModel):
    """One page of search results plus the backend's total match count."""

    model_config = _VIEW_CONFIG

    items: list[SearchItem] = Field(default_factory=list)
    total: int
    page: int
    limit: int


# ---------------------------------------------------------------------------
# Program detail
# ---------------------------------------------------------------------------

class EpisodeSummary(BaseModel):
    """An entry of the episode list on a program page."""

    model_config = _VIEW_CONFIG

    id: str
    title: str
    thumbnail_url: str | None = Field(default=None, alias="thumbnailUrl")
    video_url: str | None = Field(default=None, alias="videoUrl")
    duration_in_seconds: int | None = Field(default=None, alias="durationInSeconds")
    episode_number: int | None = Field(default=None, alias="episodeNumber")
    season_number: int | None = Field(default=None, alias="seasonNumber")
    publication_date: datetime.datetime | None = Field(default=None, alias="publicationDate")


class ProgramDetail(BaseModel):
    """A program's public fields with one page of its episodes.

    Episodes are ordered by season then episode number, ascending;
    episodes without a season come first.
    """

    model_config = _VIEW_CONFIG

    id: str
    title: str
    description: str | None = None
    type: ProgramType
    category: str
    language: str
    cover_image_url: str | None = Field(default=None, alias="coverImageUrl")
    extra_info: Any = Field(default=None, alias="extraInfo")
    episodes: list[EpisodeSummary] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Episode detail
# ---------------------------------------------------------------------------

class ProgramSummary(BaseModel):
    """Lightweight parent-program reference embedded in an episode page.

    The empty summary (``id == ""``) stands in for a parent that could not
    be loaded.
    """

    model_config = _VIEW_CONFIG

    id: str = ""
    title: str = ""
    cover_image_url: str | None = Field(default=None, alias="coverImageUrl")


class EpisodeDetail(BaseModel):
    """An episode's public fields plus a summary of its parent program."""

    model_config = _VIEW_CONFIG

    id: str
    title: str
    description: str | None = None
    video_url: str | None = Field(default=None, alias="videoUrl")
    thumbnail_url: str | None = Field(default=None, alias="thumbnailUrl")
    duration_in_seconds: int | None = Field(default=None, alias="durationInSeconds")
    episode_number: int | None = Field(default=None, alias="episodeNumber")
    season_number: int | None = Field(default=None, alias="seasonNumber")
    publication_date: datetime.datetime | None = Field(default=None, alias="publicationDate")
    extra_info: Any = Field(default=None, alias="extraInfo")
    program: ProgramSummary = Field(default_factory=ProgramSummary)


def to_wire(view: BaseModel) -> dict[str, Any]:
    """Serialize *view* to its JSON wire shape (aliases, absent fields omitted)."""
    return view.model_dump(mode="json", by_alias=True, exclude_none=True)

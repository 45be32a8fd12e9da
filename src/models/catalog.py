"""Raw catalog documents as they are stored in the search backend.

Programs and episodes are indexed by an external ingestion system as
camelCase JSON documents.  These models decode those documents; they are
never built by this service and never returned to clients directly (the
public shapes live in :mod:`src.models.views`).

Store-internal fields (``status``, ``createdAt``, ``updatedAt``) are decoded
so that a malformed value still fails loudly, but no view exposes them.

``extraInfo`` is opaque: it is decoded as an arbitrary JSON value and
carried into the views untouched.
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProgramType(str, Enum):  # noqa: UP042
    """Kinds of program the catalog holds."""

    PODCAST = "podcast"
    DOCUMENTARY = "documentary"
    SERIES = "series"


class RawProgram(BaseModel):
    """A program document from the ``programs`` collection."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    description: str | None = None
    type: ProgramType
    category: str
    language: str
    cover_image_url: str | None = Field(default=None, alias="coverImageUrl")
    extra_info: Any = Field(default=None, alias="extraInfo")
    created_at: datetime.datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime.datetime | None = Field(default=None, alias="updatedAt")


class RawEpisode(BaseModel):
    """An episode document from the ``episodes`` collection."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    program_id: str = Field(alias="programId")
    title: str
    description: str | None = None
    duration_in_seconds: int = Field(default=0, alias="durationInSeconds")
    publication_date: datetime.datetime | None = Field(default=None, alias="publicationDate")
    video_url: str | None = Field(default=None, alias="videoUrl")
    thumbnail_url: str | None = Field(default=None, alias="thumbnailUrl")
    status: str | None = None
    episode_number: int = Field(alias="episodeNumber")
    season_number: int | None = Field(default=None, alias="seasonNumber")
    extra_info: Any = Field(default=None, alias="extraInfo")
    created_at: datetime.datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime.datetime | None = Field(default=None, alias="updatedAt")

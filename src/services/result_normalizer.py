"""Maps raw, collection-tagged search hits onto search-result items.

A hit from the programs collection becomes a :class:`ProgramSearchItem`;
a hit from any other collection is decoded as an episode and becomes an
:class:`EpisodeSearchItem`.  A body that does not decode raises
:class:`DecodeError` instead of being skipped, so a search never returns a
silently truncated page.
"""

from __future__ import annotations

from typing import Any, Iterable, TypeVar

from pydantic import BaseModel, ValidationError

from src.interfaces.document_store import RawHit
from src.models.catalog import RawEpisode, RawProgram
from src.models.views import EpisodeSearchItem, ProgramSearchItem, SearchItem
from src.utils.errors import DecodeError

PROGRAMS_COLLECTION = "programs"

_M = TypeVar("_M", bound=BaseModel)


def decode_document(model: type[_M], body: dict[str, Any]) -> _M:
    """Validate *body* against *model*, raising :class:`DecodeError` on mismatch."""
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        doc_id = body.get("id") if isinstance(body, dict) else None
        raise DecodeError(
            f"Malformed {model.__name__} document {doc_id!r}: {exc.error_count()} error(s)"
        ) from exc


def program_item(program: RawProgram) -> ProgramSearchItem:
    return ProgramSearchItem(
        id=program.id,
        title=program.title,
        description=program.description,
        extra_info=program.extra_info,
        program_type=program.type,
        category=program.category,
        language=program.language,
        cover_image_url=program.cover_image_url,
    )


def episode_item(episode: RawEpisode, *, include_video_url: bool = False) -> EpisodeSearchItem:
    return EpisodeSearchItem(
        id=episode.id,
        title=episode.title,
        description=episode.description,
        extra_info=episode.extra_info,
        program_id=episode.program_id,
        thumbnail_url=episode.thumbnail_url,
        video_url=episode.video_url if include_video_url else None,
        duration_in_seconds=episode.duration_in_seconds,
        episode_number=episode.episode_number,
        season_number=episode.season_number,
        publication_date=episode.publication_date,
    )


def normalize_hit(
    hit: RawHit,
    *,
    programs_collection: str = PROGRAMS_COLLECTION,
    include_video_url: bool = False,
) -> SearchItem:
    """Convert one raw hit into exactly one search-item variant."""
    if hit.collection == programs_collection:
        return program_item(decode_document(RawProgram, hit.body))
    return episode_item(
        decode_document(RawEpisode, hit.body),
        include_video_url=include_video_url,
    )


def normalize_hits(
    hits: Iterable[RawHit],
    *,
    programs_collection: str = PROGRAMS_COLLECTION,
    include_video_url: bool = False,
) -> list[SearchItem]:
    """Normalize *hits* in order; the first malformed hit aborts the batch."""
    return [
        normalize_hit(
            hit,
            programs_collection=programs_collection,
            include_video_url=include_video_url,
        )
        for hit in hits
    ]

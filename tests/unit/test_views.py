"""Unit tests for the public view models and their wire shape."""

from __future__ import annotations

import datetime

import pytest
from pydantic import ValidationError

from src.models.catalog import ProgramType
from src.models.views import (
    EpisodeDetail,
    EpisodeSearchItem,
    EpisodeSummary,
    ProgramDetail,
    ProgramSearchItem,
    ProgramSummary,
    SearchResult,
    to_wire,
)


def _program_item(**overrides) -> ProgramSearchItem:
    fields = {
        "id": "p1",
        "title": "فنجان",
        "program_type": ProgramType.PODCAST,
        "category": "Culture",
        "language": "ar",
    }
    fields.update(overrides)
    return ProgramSearchItem(**fields)


def _episode_item(**overrides) -> EpisodeSearchItem:
    fields = {
        "id": "e1",
        "title": "Episode 1",
        "program_id": "p1",
        "duration_in_seconds": 1800,
        "episode_number": 1,
    }
    fields.update(overrides)
    return EpisodeSearchItem(**fields)


class TestSearchItems:
    def test_program_item_wire_keys(self) -> None:
        wire = to_wire(_program_item(cover_image_url="https://img/p1.jpg"))

        assert wire == {
            "type": "program",
            "id": "p1",
            "title": "فنجان",
            "programType": "podcast",
            "category": "Culture",
            "language": "ar",
            "coverImageUrl": "https://img/p1.jpg",
        }

    def test_episode_item_wire_keys(self) -> None:
        published = datetime.datetime(2024, 3, 1, 10, 0, tzinfo=datetime.timezone.utc)
        wire = to_wire(_episode_item(season_number=2, publication_date=published))

        assert wire == {
            "type": "episode",
            "id": "e1",
            "title": "Episode 1",
            "programId": "p1",
            "durationInSeconds": 1800,
            "episodeNumber": 1,
            "seasonNumber": 2,
            "publicationDate": "2024-03-01T10:00:00Z",
        }

    def test_type_tag_cannot_be_overridden(self) -> None:
        with pytest.raises(ValidationError):
            _program_item(type="episode")

    def test_views_are_immutable(self) -> None:
        item = _program_item()
        with pytest.raises(ValidationError):
            item.title = "changed"  # type: ignore[misc]


class TestSearchResult:
    def test_union_is_restored_from_wire(self) -> None:
        result = SearchResult(
            items=[_program_item(), _episode_item()],
            total=2,
            page=1,
            limit=10,
        )

        restored = SearchResult.model_validate(to_wire(result))

        assert isinstance(restored.items[0], ProgramSearchItem)
        assert isinstance(restored.items[1], EpisodeSearchItem)
        assert restored == result

    def test_unknown_item_type_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SearchResult.model_validate(
                {"items": [{"type": "clip", "id": "x"}], "total": 1, "page": 1, "limit": 10}
            )


class TestDetails:
    def test_program_detail_keeps_empty_episode_list(self) -> None:
        detail = ProgramDetail(
            id="p1",
            title="t",
            type=ProgramType.SERIES,
            category="Drama",
            language="en",
        )

        wire = to_wire(detail)

        assert wire["episodes"] == []
        assert wire["type"] == "series"
        assert "description" not in wire

    def test_episode_summary_omits_missing_season(self) -> None:
        wire = to_wire(EpisodeSummary(id="e1", title="t", episode_number=4))
        assert wire == {"id": "e1", "title": "t", "episodeNumber": 4}

    def test_empty_program_summary(self) -> None:
        summary = ProgramSummary()

        assert summary.id == ""
        assert to_wire(summary) == {"id": "", "title": ""}

    def test_episode_detail_embeds_program(self) -> None:
        detail = EpisodeDetail(
            id="e1",
            title="t",
            program=ProgramSummary(id="p1", title="فنجان"),
        )

        assert to_wire(detail)["program"] == {"id": "p1", "title": "فنجان"}
        assert detail.program != ProgramSummary()

"""Unit tests for pagination clamping helpers."""

from __future__ import annotations

import pytest

from src.utils.pagination import (
    DEFAULT_EPISODE_SIZE,
    DEFAULT_SEARCH_SIZE,
    MAX_PAGE_SIZE,
    normalize_page,
    normalize_size,
    page_offset,
    parse_int,
)


class TestNormalizePage:
    @pytest.mark.parametrize("page", [0, -1, -100, None])
    def test_invalid_pages_become_first_page(self, page) -> None:
        assert normalize_page(page) == 1

    @pytest.mark.parametrize("page", [1, 2, 9999])
    def test_valid_pages_pass_through(self, page) -> None:
        assert normalize_page(page) == page


class TestNormalizeSize:
    @pytest.mark.parametrize("size", [0, -5, MAX_PAGE_SIZE + 1, 500, None])
    def test_out_of_range_falls_back_to_default(self, size) -> None:
        assert normalize_size(size, DEFAULT_SEARCH_SIZE) == 10
        assert normalize_size(size, DEFAULT_EPISODE_SIZE) == 20

    @pytest.mark.parametrize("size", [1, 37, MAX_PAGE_SIZE])
    def test_in_range_passes_through(self, size) -> None:
        assert normalize_size(size, DEFAULT_SEARCH_SIZE) == size


def test_page_offset() -> None:
    assert page_offset(1, 10) == 0
    assert page_offset(3, 5) == 10
    assert page_offset(2, 20) == 20


class TestParseInt:
    def test_parses_integers(self) -> None:
        assert parse_int("7") == 7
        assert parse_int(" -3 ") == -3

    @pytest.mark.parametrize("raw", [None, "", "abc", "2.5", "1e3"])
    def test_unparseable_is_none(self, raw) -> None:
        assert parse_int(raw) is None

"""Pagination normalization shared by the routes and the discovery service.

Out-of-range values are clamped to defaults rather than rejected: a page
below 1 becomes 1, a size outside ``1..MAX_PAGE_SIZE`` becomes the
operation's default size.
"""

from __future__ import annotations

DEFAULT_PAGE = 1
DEFAULT_SEARCH_SIZE = 10
DEFAULT_EPISODE_SIZE = 20
MAX_PAGE_SIZE = 100


def normalize_page(page: int | None) -> int:
    """Return *page* if it is a valid 1-based page number, else 1."""
    if page is None or page < 1:
        return DEFAULT_PAGE
    return page


def normalize_size(size: int | None, default: int = DEFAULT_SEARCH_SIZE) -> int:
    """Return *size* if it lies in ``1..MAX_PAGE_SIZE``, else *default*."""
    if size is None or size < 1 or size > MAX_PAGE_SIZE:
        return default
    return size


def page_offset(page: int, size: int) -> int:
    """Zero-based offset of the first item on *page*."""
    return (page - 1) * size


def parse_int(raw: str | None) -> int | None:
    """Parse a query-string integer, returning ``None`` for anything unparseable."""
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None

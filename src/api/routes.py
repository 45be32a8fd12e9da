"""FastAPI routes for the Discovery API.

# ─── API ROUTE MAP ─────────────────────────────────────────────────────
#
# Endpoint                          Method  Description
# ─────────────────────────────────────────────────────────────────────
# /discovery/search                 GET     Unified program + episode search
# /discovery/programs/{id}          GET     Program with a page of episodes
# /discovery/episodes/{id}          GET     Episode with parent program summary
# /discovery/health                 GET     Health check + provider names
#
# Pagination query parameters are read as raw strings and clamped to
# defaults when missing, non-numeric, or out of range; they never 422.
# ──────────────────────────────────────────────────────────────────────

The discovery service is resolved from ``app.state`` via ``Depends`` using
the ``Annotated`` pattern.  Errors raised by the service propagate to
``ErrorHandlingMiddleware``, which maps them to 404/400/500 bodies.
"""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Query, Request

from src.api.schemas import ErrorResponse, HealthResponse
from src.models.views import EpisodeDetail, ProgramDetail, SearchResult
from src.services.discovery_service import DiscoveryService
from src.utils.logging import get_logger
from src.utils.pagination import parse_int

_logger: structlog.BoundLogger = get_logger(__name__)

API_PREFIX = "/discovery"
API_VERSION = "1.0.0"

router = APIRouter(prefix=API_PREFIX)


# ---------------------------------------------------------------------------
# Dependency injection helpers: resolve singletons from app.state
# ---------------------------------------------------------------------------


def _get_discovery_service(request: Request) -> DiscoveryService:
    """Return the discovery service from application state."""
    return request.app.state.discovery_service


DiscoveryDep = Annotated[DiscoveryService, Depends(_get_discovery_service)]


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


@router.get(
    "/search",
    response_model=SearchResult,
    response_model_exclude_none=True,
    responses={500: {"model": ErrorResponse}},
    tags=["search"],
    summary="Search programs and episodes",
)
async def search(
    service: DiscoveryDep,
    q: Annotated[str, Query(description="Full-text query across titles and descriptions")] = "",
    category: Annotated[str, Query(description="Exact-match category filter")] = "",
    language: Annotated[str, Query(description="Exact-match language code, e.g. ar, en")] = "",
    page: Annotated[str | None, Query(description="Page number, starts at 1")] = None,
    size: Annotated[str | None, Query(description="Items per page (1-100, default 10)")] = None,
    limit: Annotated[str | None, Query(description="Alias of size")] = None,
) -> SearchResult:
    """Return a relevance-ranked, mixed list of programs and episodes.

    Each item carries ``type`` ("program" or "episode") and only the fields
    of that type.  Results are cached for 2 minutes.
    """
    return await service.search(
        query=q,
        category=category,
        language=language,
        page=parse_int(page),
        limit=parse_int(size if size is not None else limit),
    )


# ---------------------------------------------------------------------------
# Detail endpoints
# ---------------------------------------------------------------------------


@router.get(
    "/programs/{program_id}",
    response_model=ProgramDetail,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    tags=["programs"],
    summary="Get a program with its episodes",
)
async def get_program(
    program_id: str,
    service: DiscoveryDep,
    episode_page: Annotated[
        str | None, Query(alias="episodePage", description="Episode page number (starts at 1)")
    ] = None,
    episode_size: Annotated[
        str | None, Query(alias="episodeSize", description="Episodes per page (default 20, max 100)")
    ] = None,
) -> ProgramDetail:
    """Return a program and one page of its episodes.

    Episodes are ordered by season then episode number, ascending, with
    season-less episodes first.  Responses are cached for 3 minutes.
    """
    return await service.get_program(
        program_id,
        episode_page=parse_int(episode_page),
        episode_size=parse_int(episode_size),
    )


@router.get(
    "/episodes/{episode_id}",
    response_model=EpisodeDetail,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    tags=["episodes"],
    summary="Get an episode",
)
async def get_episode(episode_id: str, service: DiscoveryDep) -> EpisodeDetail:
    """Return an episode with a lightweight summary of its parent program.

    ``program`` is the empty summary when the parent cannot be loaded.
    Responses are cached for 3 minutes.
    """
    return await service.get_episode(episode_id)


# ---------------------------------------------------------------------------
# System endpoints
# ---------------------------------------------------------------------------


@router.get(
    "/health",
    response_model=HealthResponse,
    tags=["system"],
    summary="Application health check",
)
async def health_check(request: Request) -> HealthResponse:
    """Return application health, version, and configured providers."""
    providers = dict(getattr(request.app.state, "provider_registry", {}))
    return HealthResponse(status="ok", version=API_VERSION, providers=providers)

"""Discovery API FastAPI application entry point.

Wires the document store, cache, and discovery service together from
settings, configures structured logging, and mounts the routes under
``/discovery``.  Interactive docs are served at ``/discovery/api/docs``.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import API_PREFIX, API_VERSION
from src.api.routes import router as api_router
from src.config.loader import load_config
from src.config.settings import Settings
from src.interfaces.cache_provider import ICacheProvider
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.cache.redis_cache import RedisCacheProvider
from src.providers.store.elasticsearch_provider import ElasticsearchStoreProvider
from src.services.discovery_service import DETAIL_CACHE_TTL_SECONDS, DiscoveryService
from src.utils.errors import ConfigurationError
from src.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Provider selection
# ---------------------------------------------------------------------------


def _build_cache(app_settings: Settings) -> ICacheProvider:
    """Return the cache backend named by ``CACHE_BACKEND``."""
    backend = app_settings.cache_backend.strip().lower()
    if backend == "redis":
        return RedisCacheProvider.from_settings(
            host=app_settings.redis_host,
            port=app_settings.redis_port,
            password=app_settings.redis_password,
            use_tls=app_settings.redis_tls,
            default_ttl=DETAIL_CACHE_TTL_SECONDS,
        )
    if backend == "memory":
        return MemoryCacheProvider(
            max_size=app_settings.memory_cache_max_size,
            ttl=DETAIL_CACHE_TTL_SECONDS,
        )
    raise ConfigurationError(f"Unknown CACHE_BACKEND: {app_settings.cache_backend!r}")


# ---------------------------------------------------------------------------
# Full DI assembly for the FastAPI application
# ---------------------------------------------------------------------------


def _build_all(app_settings: Settings, config: dict[str, Any] | None = None) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    config = config if config is not None else load_config(settings=app_settings)
    store_config = config.get("store", {})
    collections = store_config.get("collections", {})
    programs_collection = collections.get("programs", "programs")
    episodes_collection = collections.get("episodes", "episodes")
    views_config = config.get("views", {})

    http_client = httpx.AsyncClient(
        timeout=store_config.get("timeout_seconds", app_settings.store_timeout_seconds)
    )
    store = ElasticsearchStoreProvider(
        http_client=http_client,
        base_url=store_config.get("endpoint", app_settings.os_endpoint),
        programs_collection=programs_collection,
        episodes_collection=episodes_collection,
    )
    cache = _build_cache(app_settings)

    discovery_service = DiscoveryService(
        store=store,
        cache=cache,
        programs_collection=programs_collection,
        include_video_url_in_search=views_config.get(
            "search_include_video_url", app_settings.search_include_video_url
        ),
    )

    provider_registry: dict[str, str] = {
        "store": store.get_provider_name(),
        "cache": type(cache).__name__,
    }

    return {
        "store": store,
        "cache": cache,
        "discovery_service": discovery_service,
        "provider_registry": provider_registry,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Initialise providers and the service on startup, close clients on shutdown."""
    app_settings: Settings = application.state.settings
    components = _build_all(app_settings)

    for key, value in components.items():
        setattr(application.state, key, value)

    _logger.info(
        "app_startup",
        version=API_VERSION,
        environment=app_settings.app_env,
        store_endpoint=app_settings.os_endpoint,
        cache=components["provider_registry"]["cache"],
    )

    yield

    await components["store"].close()
    await components["cache"].close()
    _logger.info("app_shutdown", message="Store and cache clients closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(app_settings: Settings | None = None, *, with_lifespan: bool = True) -> FastAPI:
    """Build and configure the FastAPI application.

    Tests pass ``with_lifespan=False`` and populate ``app.state`` themselves.
    """
    s = app_settings or settings
    application = FastAPI(
        title="Discovery API",
        version=API_VERSION,
        description=(
            "Read-only search and content discovery over programs and episodes. "
            "Returns a unified list of programs and episodes; responses are "
            "cached with a short TTL."
        ),
        docs_url=f"{API_PREFIX}/api/docs",
        redoc_url=None,
        openapi_url=f"{API_PREFIX}/api/openapi.json",
        lifespan=_lifespan if with_lifespan else None,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application, allowed_origins=s.get_cors_origins())

    application.state.settings = s
    application.include_router(api_router)
    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def run() -> None:
    """Serve the API with uvicorn (``discovery-api`` console script)."""
    uvicorn.run(
        "src.main:app",
        host=settings.app_host,
        port=settings.port,
        reload=(settings.app_env == "development"),
    )


if __name__ == "__main__":
    run()

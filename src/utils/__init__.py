"""Utility modules for the Discovery API.

Available utility modules (all re-exported here for convenience):

- **errors** -- Domain exception hierarchy rooted at DiscoveryError; each
  class carries the HTTP status the API layer reports it with.
- **concurrency** -- Join-all-or-cancel fan-out used to run sub-queries
  concurrently under one cancellation scope.
- **logging** -- structlog setup (console in development, JSON in production)
  plus request-id context binding for the middleware.
- **pagination** -- Page/size clamping and offset arithmetic.
"""

# -- Domain exception hierarchy --------------------------------------------
from src.utils.errors import (
    CacheError,
    ConfigurationError,
    DecodeError,
    DiscoveryError,
    InvalidRequestError,
    NotFoundError,
    StoreError,
)

# -- Async concurrency helpers ---------------------------------------------
from src.utils.concurrency import gather_or_cancel

# -- Structured logging setup ----------------------------------------------
from src.utils.logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
)

# -- Pagination ------------------------------------------------------------
from src.utils.pagination import normalize_page, normalize_size, page_offset

__all__ = [
    "CacheError",
    "ConfigurationError",
    "DecodeError",
    "DiscoveryError",
    "InvalidRequestError",
    "NotFoundError",
    "StoreError",
    "bind_request_context",
    "clear_request_context",
    "configure_logging",
    "gather_or_cancel",
    "get_logger",
    "normalize_page",
    "normalize_size",
    "page_offset",
]

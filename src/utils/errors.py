"""Custom exception hierarchy for the Discovery API.

All application exceptions inherit from :class:`DiscoveryError`, which
carries an optional ``provider_name`` so error handlers can identify which
collaborator (e.g. "elasticsearch", "redis") caused the failure.

The hierarchy is organized by how the HTTP layer reports the failure:

    DiscoveryError  (base -- catch-all for any discovery error)
    +-- NotFoundError          (no document for the requested id, 404)
    +-- InvalidRequestError    (malformed input that cannot be clamped, 400)
    +-- StoreError             (search backend unreachable or failing, 500)
    |   +-- DecodeError        (raw document does not fit its expected shape)
    +-- CacheError             (cache backend failure, never surfaced)
    +-- ConfigurationError     (startup / invalid config)

Each class exposes a ``status_code`` class attribute used by the API
middleware to pick the response status.
"""


class DiscoveryError(Exception):
    """Base exception for all Discovery API errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which collaborator triggered the error.
    The ``__str__`` method prefixes the provider name in brackets for
    structured log output, e.g. ``[elasticsearch] HTTP 503``.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Client-facing errors
# ---------------------------------------------------------------------------

class NotFoundError(DiscoveryError):
    """Raised when no document exists for a requested id.

    Authoritative: callers must not retry and must not mask it as a
    generic failure.
    """

    status_code = 404

    def __init__(
        self,
        message: str = "Document not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class InvalidRequestError(DiscoveryError):
    """Raised for input that cannot be normalized (e.g. an empty id)."""

    status_code = 400

    def __init__(
        self,
        message: str = "Invalid request",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Infrastructure errors
# ---------------------------------------------------------------------------

class StoreError(DiscoveryError):
    """Raised when the document store fails (transport or backend error)."""

    def __init__(
        self,
        message: str = "Document store request failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class DecodeError(StoreError):
    """Raised when a raw document cannot be parsed into its expected shape.

    Treated like any other store failure: the enclosing operation fails
    rather than silently dropping the bad document.
    """

    def __init__(
        self,
        message: str = "Failed to decode document",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class CacheError(DiscoveryError):
    """Raised by cache providers on backend failure.

    The discovery service contains these: a failed read is a miss and a
    failed write is dropped.
    """

    def __init__(
        self,
        message: str = "Cache operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(DiscoveryError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)

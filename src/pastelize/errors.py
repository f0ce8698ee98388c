"""Error hierarchy for pastelize."""
from __future__ import annotations

from typing import Any


class PastelizeError(Exception):
    """Base error for all pastelize errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ConfigurationError(PastelizeError):
    """Invalid configuration value."""


class UnknownVariantError(ConfigurationError):
    """No generator is registered under the requested variant name."""


# ---------------------------------------------------------------------------
# HTTP errors (page fetching and the classification service)
# ---------------------------------------------------------------------------


class TransportError(PastelizeError):
    """An HTTP exchange failed."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        retryable: bool = False,
        retry_after: float | None = None,
        raw: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.status_code = status_code
        self.retryable = retryable
        self.retry_after = retry_after
        self.raw = raw


class NetworkError(TransportError):
    """A network-level error occurred."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)


class RequestTimeoutError(TransportError):
    """A request timed out."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)


class ClientRequestError(TransportError):
    """The server rejected the request (4xx)."""


class RateLimitError(TransportError):
    """Rate limit exceeded."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)


class ServerError(TransportError):
    """Server-side error (5xx)."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)


class FetchError(PastelizeError):
    """The page itself could not be retrieved."""


# ---------------------------------------------------------------------------
# Classification errors
# ---------------------------------------------------------------------------


class ClassifierError(PastelizeError):
    """The color classification service could not produce a result."""


class ClassifierResponseError(ClassifierError):
    """The classification service answered with something unusable."""


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------


def error_from_status_code(
    status_code: int,
    message: str,
    *,
    raw: dict[str, Any] | None = None,
    retry_after: float | None = None,
) -> TransportError:
    """Map HTTP status code to the appropriate error type."""
    common = dict(status_code=status_code, raw=raw, retry_after=retry_after)

    if status_code == 408:
        return RequestTimeoutError(message, **common)
    if status_code == 429:
        return RateLimitError(message, **common)
    if 500 <= status_code <= 599:
        return ServerError(message, **common)
    if 400 <= status_code <= 499:
        return ClientRequestError(message, **common)
    return TransportError(message, retryable=True, **common)

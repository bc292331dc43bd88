"""Exception hierarchy shared by the crawler components."""
from __future__ import annotations

from typing import Optional


class CrecError(RuntimeError):
    """Base class for all errors raised by ``crec_speeches``."""


class ConfigurationError(CrecError):
    """Raised when a crawl cannot start because its parameters are invalid."""


class GovInfoClientError(CrecError):
    """Raised when the govinfo API responds with an error."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransportError(GovInfoClientError):
    """A pagination request failed; the crawl cannot continue."""


class FetchFailed(GovInfoClientError):
    """A per-granule request failed; only that granule is affected."""


class NotFound(FetchFailed):
    """The requested granule resource does not exist."""


__all__ = [
    "ConfigurationError",
    "CrecError",
    "FetchFailed",
    "GovInfoClientError",
    "NotFound",
    "TransportError",
]

"""
BrooBot exception hierarchy.

Only InvalidArgument reaches callers of the core search path; upstream
failures are recovered locally by falling back to cached, mock or static
data.
"""

from typing import Optional


class BrooBotError(Exception):
    """Base exception for all BrooBot errors."""


class InvalidArgument(BrooBotError):
    """Missing or malformed request input (query, messages, mode)."""


class UpstreamUnavailable(BrooBotError):
    """Scrape proxy, search provider or completion provider failure."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimited(UpstreamUnavailable):
    """Upstream answered HTTP 429. Callers fall back immediately, no retry."""

    def __init__(self, message: str = "Rate limit exceeded") -> None:
        super().__init__(message, status_code=429)


class InternalError(BrooBotError):
    """Unexpected failure inside BrooBot itself."""

"""
Error types raised or returned by the catalogue's upstream layer.

``FetchError`` and its subclasses describe why a request to the Rick
and Morty API did not produce usable data. The list fetcher hands
these back as values so that page handlers can decide on a fallback;
the lower-level HTTP helper raises them. ``MalformedCursor`` is raised
by the cursor navigator when a pagination URL carries no usable page
number.
"""

from enum import Enum
from typing import Optional


class FetchErrorKind(str, Enum):
    NETWORK = "NetworkError"
    UPSTREAM = "UpstreamError"
    DECODE = "DecodeError"


class FetchError(Exception):
    """Base class for failed upstream reads."""

    kind: FetchErrorKind

    def __init__(self, url: str, message: str = "") -> None:
        self.url = url
        super().__init__(message or f"{self.kind.value} fetching {url}")


class NetworkError(FetchError):
    kind = FetchErrorKind.NETWORK


class UpstreamError(FetchError):
    kind = FetchErrorKind.UPSTREAM

    def __init__(self, url: str, status: int, message: str = "") -> None:
        self.status = status
        super().__init__(url, message or f"Upstream returned {status} for {url}")


class DecodeError(FetchError):
    kind = FetchErrorKind.DECODE


class MalformedCursor(ValueError):
    def __init__(self, cursor_url: str, reason: str) -> None:
        self.cursor_url = cursor_url
        super().__init__(f"Malformed cursor {cursor_url!r}: {reason}")


__all__ = [
    "FetchErrorKind",
    "FetchError",
    "NetworkError",
    "UpstreamError",
    "DecodeError",
    "MalformedCursor",
]

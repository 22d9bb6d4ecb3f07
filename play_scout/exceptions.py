# File: play_scout/exceptions.py
"""play_scout.exceptions: error taxonomy shared by the fetcher, parsers and paginators."""

from __future__ import annotations

from typing import Optional

__all__ = [
    "ScraperError",
    "ValidationError",
    "NotFoundError",
    "RequestFailureError",
    "ExtractionStructureError",
]


class ScraperError(Exception):
    """Base class for every error raised by play_scout."""


class ValidationError(ScraperError, ValueError):
    """Caller-supplied argument is outside the accepted contract."""


class NotFoundError(ScraperError):
    """The store answered 404 for the requested resource."""

    def __init__(self, message: str = "Requested resource not found", url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class RequestFailureError(ScraperError):
    """Any non-200, non-404 answer from the store."""

    def __init__(self, status_code: int, url: Optional[str] = None) -> None:
        super().__init__(f'Request failed with "{status_code}" status code')
        self.status_code = status_code
        self.url = url


class ExtractionStructureError(ScraperError):
    """A required node exists but cannot be parsed: the page template changed."""

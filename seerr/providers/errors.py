"""Error types raised by metadata provider clients.

Catch ``ExternalApiError`` for any provider failure and inspect
``status_code``/``details`` for the HTTP context.
"""

from __future__ import annotations

from typing import Any, Optional


class ExternalApiError(Exception):
    """Base error for metadata provider failures.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code associated with the failure.
        details: Optional payload returned by the remote API.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class MediaNotFoundError(ExternalApiError):
    """Raised when the provider has no record for the requested id (HTTP 404)."""

    def __init__(self, media_type: str, media_id: int) -> None:
        super().__init__(f"{media_type} {media_id} not found", status_code=404)
        self.media_type = media_type
        self.media_id = media_id

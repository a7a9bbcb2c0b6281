"""
Media and media request I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import Field

from seerr.core.models.domain import MediaType

from .common import ApiModel
from .users import UserRead


class MediaRead(ApiModel):
    """Schema for reading a tracked media item."""

    id: int
    media_type: str
    tmdb_id: Optional[int] = None
    tvdb_id: Optional[int] = None
    imdb_id: Optional[str] = None
    status: int
    status_4k: int = Field(alias="status4k")
    service_id: Optional[int] = None
    service_id_4k: Optional[int] = Field(default=None, alias="serviceId4k")
    created_at: datetime
    updated_at: datetime


class MediaRequestRead(ApiModel):
    """Schema for reading a media request.

    ``media`` and ``requested_by`` are attached by the endpoint.
    """

    id: int
    status: int
    type: str
    media_id: int
    requested_by_id: int
    modified_by_id: Optional[int] = None
    is_4k: bool = Field(alias="is4k")
    is_auto_request: bool = False
    server_id: Optional[int] = None
    profile_id: Optional[int] = None
    root_folder: Optional[str] = None
    language_profile_id: Optional[int] = None
    tags: List[int] = Field(default_factory=list)
    seasons: List[int] = Field(default_factory=list)
    decline_reason: Optional[str] = None
    media: Optional[MediaRead] = None
    requested_by: Optional[UserRead] = None
    created_at: datetime
    updated_at: datetime


class MediaRequestCreate(ApiModel):
    """Schema for submitting a media request."""

    media_type: MediaType
    media_id: int = Field(description="TMDb id of the movie or series")
    tvdb_id: Optional[int] = None
    seasons: Optional[Union[List[int], Literal["all"]]] = Field(
        default=None, description="Season numbers, or 'all' (series only)"
    )
    is_4k: bool = Field(default=False, alias="is4k")
    server_id: Optional[int] = None
    profile_id: Optional[int] = None
    root_folder: Optional[str] = None
    language_profile_id: Optional[int] = None
    user_id: Optional[int] = Field(default=None, description="Request on behalf of another user")
    tags: Optional[List[int]] = None


class MediaRequestDecline(ApiModel):
    reason: Optional[str] = Field(default=None, max_length=1024)


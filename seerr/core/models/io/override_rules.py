"""
Override rule I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from seerr.core.models.domain import MediaType

from .common import ApiModel


class OverrideRuleRead(ApiModel):
    """Schema for reading an override rule from the API."""

    id: int
    radarr_service_id: Optional[int] = None
    sonarr_service_id: Optional[int] = None
    users: Optional[str] = None
    genre: Optional[str] = None
    language: Optional[str] = None
    keywords: Optional[str] = None
    profile_id: Optional[int] = None
    root_folder: Optional[str] = None
    tags: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class OverrideRuleWrite(ApiModel):
    """Schema for creating or replacing an override rule.

    ``radarrServiceId``/``sonarrServiceId`` are indexes into the instance lists.
    """

    radarr_service_id: Optional[int] = None
    sonarr_service_id: Optional[int] = None
    users: Optional[str] = None
    genre: Optional[str] = None
    language: Optional[str] = None
    keywords: Optional[str] = None
    profile_id: Optional[int] = None
    root_folder: Optional[str] = None
    tags: Optional[str] = None


class AdvancedRequestQuery(ApiModel):
    media_type: MediaType
    tmdb_id: int
    is_4k: bool = Field(default=False, alias="is4k")
    request_user: int = Field(description="Id of the user the request is made for")


class OverrideRulesResultRead(ApiModel):
    root_folder: Optional[str] = None
    profile_id: Optional[int] = None
    tags: Optional[List[int]] = None

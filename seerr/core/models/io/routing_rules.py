"""
Routing rule I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .common import ApiModel


class RoutingRuleRead(ApiModel):
    """Schema for reading a routing rule from the API."""

    id: int
    name: str
    service_type: str
    is_4k: bool = Field(alias="is4k")
    priority: int
    users: Optional[str] = None
    genres: Optional[str] = None
    languages: Optional[str] = None
    keywords: Optional[str] = None
    target_service_id: int
    active_profile_id: Optional[int] = None
    root_folder: Optional[str] = None
    series_type: Optional[str] = None
    tags: Optional[str] = None
    minimum_availability: Optional[str] = None
    is_fallback: bool
    created_at: datetime
    updated_at: datetime


class RoutingRuleCreate(ApiModel):
    """Schema for creating a routing rule.

    ``is4k`` is not accepted; it is derived from the target instance.
    """

    name: str = Field(min_length=1, max_length=255)
    service_type: str = Field(description="radarr or sonarr")
    target_service_id: int = Field(description="Instance id from the settings file")
    is_fallback: bool = False
    users: Optional[str] = Field(default=None, description="Comma-separated user ids")
    genres: Optional[str] = Field(default=None, description="Comma-separated genre ids")
    languages: Optional[str] = Field(default=None, description="Pipe-separated language codes")
    keywords: Optional[str] = Field(default=None, description="Comma-separated keyword ids")
    active_profile_id: Optional[int] = None
    root_folder: Optional[str] = None
    series_type: Optional[str] = None
    tags: Optional[str] = None
    minimum_availability: Optional[str] = None


class RoutingRuleUpdate(ApiModel):
    """Schema for updating a routing rule. Unset fields keep their stored value."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    service_type: Optional[str] = None
    target_service_id: Optional[int] = None
    is_fallback: Optional[bool] = None
    priority: Optional[int] = None
    users: Optional[str] = None
    genres: Optional[str] = None
    languages: Optional[str] = None
    keywords: Optional[str] = None
    active_profile_id: Optional[int] = None
    root_folder: Optional[str] = None
    series_type: Optional[str] = None
    tags: Optional[str] = None
    minimum_availability: Optional[str] = None


class RoutingRuleReorder(ApiModel):
    rule_ids: List[int] = Field(description="Rule ids from highest to lowest priority")

"""
Blocklist I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from seerr.core.models.domain import MediaType

from .common import ApiModel

BlocklistFilter = Literal["all", "manual", "blocklistedTags"]


class BlocklistRead(ApiModel):
    """Schema for reading a blocklist entry from the API."""

    id: int
    media_type: str
    title: Optional[str] = None
    tmdb_id: int
    user_id: Optional[int] = None
    media_id: Optional[int] = None
    blocklisted_tags: Optional[str] = None
    created_at: datetime


class BlocklistCreate(ApiModel):
    """Schema for blocklisting a title."""

    tmdb_id: int
    media_type: MediaType
    title: Optional[str] = Field(default=None, max_length=512)
    user: Optional[int] = Field(default=None, description="User id recorded as the blocklister")

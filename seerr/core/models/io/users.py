"""
User I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from .common import ApiModel


class UserRead(ApiModel):
    """Schema for reading a user from the API."""

    id: int
    email: str
    username: Optional[str] = None
    plex_username: Optional[str] = None
    jellyfin_username: Optional[str] = None
    display_name: str
    user_type: int
    permissions: int
    avatar: str = ""
    max_movie_rating: Optional[str] = None
    max_tv_rating: Optional[str] = None
    movie_quota_limit: Optional[int] = None
    movie_quota_days: Optional[int] = None
    tv_quota_limit: Optional[int] = None
    tv_quota_days: Optional[int] = None
    combined_quota_limit: Optional[int] = None
    combined_quota_days: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class UserCreate(ApiModel):
    """Schema for creating a local user.

    ``permissions`` defaults to ``main.defaultPermissions`` from the settings file.
    """

    email: str = Field(min_length=3, max_length=255)
    username: Optional[str] = None
    permissions: Optional[int] = Field(default=None, ge=0)


class UserUpdate(ApiModel):
    """Schema for updating a user. Unset fields are left unchanged."""

    username: Optional[str] = None
    email: Optional[str] = None
    permissions: Optional[int] = Field(default=None, ge=0)
    max_movie_rating: Optional[str] = None
    max_tv_rating: Optional[str] = None
    movie_quota_limit: Optional[int] = Field(default=None, ge=0)
    movie_quota_days: Optional[int] = Field(default=None, ge=0)
    tv_quota_limit: Optional[int] = Field(default=None, ge=0)
    tv_quota_days: Optional[int] = Field(default=None, ge=0)
    combined_quota_limit: Optional[int] = Field(default=None, ge=0)
    combined_quota_days: Optional[int] = Field(default=None, ge=0)

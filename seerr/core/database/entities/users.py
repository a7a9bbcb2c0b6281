"""
User entity model.

Users carry their permission bitmask and optional per-user request quotas.
Quota columns left NULL fall back to the global defaults from the settings file.
"""

from __future__ import annotations

from datetime import datetime
from enum import IntEnum
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class UserType(IntEnum):
    PLEX = 1
    LOCAL = 2
    JELLYFIN = 3
    EMBY = 4


class UserBase(Base):
    """Base fields for users."""

    email: str = Field(max_length=255, description="Login email, stored lowercase")
    username: Optional[str] = Field(default=None, max_length=255)
    plex_username: Optional[str] = Field(default=None, max_length=255)
    jellyfin_username: Optional[str] = Field(default=None, max_length=255)
    user_type: int = Field(default=int(UserType.PLEX), description="Account origin (UserType)")
    permissions: int = Field(default=0, description="Permission bitmask")
    avatar: str = Field(default="", max_length=512)
    max_movie_rating: Optional[str] = Field(default=None, max_length=16, description="Highest MPAA rating the user may request")
    max_tv_rating: Optional[str] = Field(default=None, max_length=16, description="Highest TV rating the user may request")

    movie_quota_limit: Optional[int] = Field(default=None)
    movie_quota_days: Optional[int] = Field(default=None)
    tv_quota_limit: Optional[int] = Field(default=None)
    tv_quota_days: Optional[int] = Field(default=None)
    combined_quota_limit: Optional[int] = Field(default=None)
    combined_quota_days: Optional[int] = Field(default=None)


class User(UserBase, table=True):
    """Persistent user account.

    Table: users
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    @property
    def display_name(self) -> str:
        return self.username or self.plex_username or self.jellyfin_username or self.email

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email})"

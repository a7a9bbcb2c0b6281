"""
Media entity model.

A Media row tracks one title (movie, series or book) and its library
availability in both the standard and the 4K library.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from seerr.core.models.domain import MediaStatus

from ..base import Base, utc_now


class Media(Base, table=True):
    """Tracked media item.

    Table: media
    """

    __tablename__ = "media"
    __table_args__ = (UniqueConstraint("tmdb_id", "media_type", name="uq_media_tmdb_id_media_type"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    media_type: str = Field(max_length=16, description="movie, tv or book")
    tmdb_id: Optional[int] = Field(default=None, index=True)
    tvdb_id: Optional[int] = Field(default=None, unique=True, index=True)
    imdb_id: Optional[str] = Field(default=None, max_length=32, index=True)
    hc_id: Optional[int] = Field(default=None, index=True, description="Hardcover id for books")

    status: int = Field(default=int(MediaStatus.UNKNOWN))
    status_4k: int = Field(default=int(MediaStatus.UNKNOWN))

    service_id: Optional[int] = Field(default=None)
    service_id_4k: Optional[int] = Field(default=None)
    external_service_id: Optional[int] = Field(default=None)
    external_service_id_4k: Optional[int] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Media(id={self.id}, media_type={self.media_type}, tmdb_id={self.tmdb_id})"

"""
Media request entity model.

A request links a user to a Media row and records where the approved request
is sent (server, quality profile, root folder and tags).
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlmodel import JSON, Field

from seerr.core.models.domain import MediaRequestStatus

from ..base import Base, utc_now


class MediaRequest(Base, table=True):
    """Persistent media request.

    Table: media_requests
    """

    __tablename__ = "media_requests"

    id: Optional[int] = Field(default=None, primary_key=True)
    status: int = Field(default=int(MediaRequestStatus.PENDING), index=True)
    type: str = Field(max_length=16, description="movie, tv or book")

    media_id: int = Field(foreign_key="media.id", ondelete="CASCADE", index=True)
    requested_by_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    modified_by_id: Optional[int] = Field(default=None, foreign_key="users.id", ondelete="SET NULL")

    is_4k: bool = Field(default=False)
    is_auto_request: bool = Field(default=False)
    server_id: Optional[int] = Field(default=None)
    profile_id: Optional[int] = Field(default=None)
    root_folder: Optional[str] = Field(default=None, max_length=512)
    language_profile_id: Optional[int] = Field(default=None)
    tags: List[int] = Field(default_factory=list, sa_type=JSON)
    seasons: List[int] = Field(default_factory=list, sa_type=JSON, description="Requested season numbers (tv)")
    decline_reason: Optional[str] = Field(default=None, max_length=1024)

    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    @property
    def season_count(self) -> int:
        return len(self.seasons or [])

    def __repr__(self) -> str:
        return f"MediaRequest(id={self.id}, type={self.type}, status={self.status})"

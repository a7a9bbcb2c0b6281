"""
Blocklist entity model.

A blocklisted title cannot be requested. Entries are unique per
(tmdb_id, media_type).
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from ..base import Base, utc_now


class Blocklist(Base, table=True):
    """Blocklisted title.

    Table: blocklist
    """

    __tablename__ = "blocklist"
    __table_args__ = (UniqueConstraint("tmdb_id", "media_type", name="uq_blocklist_tmdb_id_media_type"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    media_type: str = Field(max_length=16)
    title: Optional[str] = Field(default=None, max_length=512)
    tmdb_id: int = Field(index=True)
    user_id: Optional[int] = Field(default=None, foreign_key="users.id", ondelete="SET NULL")
    media_id: Optional[int] = Field(default=None, foreign_key="media.id", ondelete="CASCADE")
    blocklisted_tags: Optional[str] = Field(default=None, description="Tag ids that caused an automatic blocklisting")

    created_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"Blocklist(id={self.id}, tmdb_id={self.tmdb_id}, media_type={self.media_type})"

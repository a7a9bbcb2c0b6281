"""
Override rule entity model.

Legacy per-instance overrides for root folder, quality profile and tags.
``radarr_service_id``/``sonarr_service_id`` hold the *index* of the instance in
the settings list, not its id.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class OverrideRuleBase(Base):
    radarr_service_id: Optional[int] = Field(default=None)
    sonarr_service_id: Optional[int] = Field(default=None)
    users: Optional[str] = Field(default=None)
    genre: Optional[str] = Field(default=None)
    language: Optional[str] = Field(default=None)
    keywords: Optional[str] = Field(default=None)
    profile_id: Optional[int] = Field(default=None)
    root_folder: Optional[str] = Field(default=None, max_length=512)
    tags: Optional[str] = Field(default=None)


class OverrideRule(OverrideRuleBase, table=True):
    """Persistent override rule.

    Table: override_rules
    """

    __tablename__ = "override_rules"

    id: Optional[int] = Field(default=None, primary_key=True)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def specificity(self) -> int:
        """Number of content conditions set; more specific rules win."""
        return sum(value is not None for value in (self.genre, self.language, self.keywords))

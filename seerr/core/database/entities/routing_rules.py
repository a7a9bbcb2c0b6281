"""
Routing rule entity model.

Routing rules pick the Radarr/Sonarr instance and its options for a request.
Rules are evaluated by descending priority; condition columns hold
comma-separated ids (users, genres, keywords) or ``|``-separated language codes.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class RoutingRuleBase(Base):
    """Base fields for routing rules."""

    name: str = Field(max_length=255)
    service_type: str = Field(max_length=16, description="radarr or sonarr")
    is_4k: bool = Field(default=False)
    priority: int = Field(default=0)

    # Conditions
    users: Optional[str] = Field(default=None, description="Comma-separated user ids")
    genres: Optional[str] = Field(default=None, description="Comma-separated genre ids")
    languages: Optional[str] = Field(default=None, description="Pipe-separated ISO 639-1 codes")
    keywords: Optional[str] = Field(default=None, description="Comma-separated keyword ids")

    # Target
    target_service_id: int = Field(description="Radarr/Sonarr instance id from settings")
    active_profile_id: Optional[int] = Field(default=None)
    root_folder: Optional[str] = Field(default=None, max_length=512)
    series_type: Optional[str] = Field(default=None, max_length=16)
    tags: Optional[str] = Field(default=None, description="Comma-separated tag ids")
    minimum_availability: Optional[str] = Field(default=None, max_length=32)
    is_fallback: bool = Field(default=False)


class RoutingRule(RoutingRuleBase, table=True):
    """Persistent routing rule.

    Table: routing_rules
    """

    __tablename__ = "routing_rules"

    id: Optional[int] = Field(default=None, primary_key=True)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def has_conditions(self) -> bool:
        return any((self.users, self.genres, self.languages, self.keywords))

    def __repr__(self) -> str:
        return f"RoutingRule(id={self.id}, name={self.name}, service_type={self.service_type}, priority={self.priority})"

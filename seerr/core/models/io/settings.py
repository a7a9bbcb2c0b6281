"""
Settings I/O models.

The settings sections themselves are served with the models from
``seerr.core.settings``; this module holds the request bodies that are not
settings sections.
"""

from __future__ import annotations

from typing import Optional

from seerr.core.models.domain import MetadataProviderType

from .common import ApiModel


class MetadataSettingsUpdate(ApiModel):
    tv: Optional[MetadataProviderType] = None
    anime: Optional[MetadataProviderType] = None


class StatusRead(ApiModel):
    version: str
    commit_tag: str = "local"
    update_available: bool = False
    commits_behind: int = 0
    restart_required: bool = False

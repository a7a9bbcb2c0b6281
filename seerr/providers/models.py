"""
Provider-neutral media detail models.

Every metadata provider maps its payload onto ``MediaDetails`` so the request
pipeline, routing rules and content filters never see vendor formats.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from seerr.core.models.domain import ANIME_KEYWORD_ID, MediaType


class Genre(BaseModel):
    id: int
    name: str = ""


class Keyword(BaseModel):
    id: int
    name: str = ""


class ExternalIds(BaseModel):
    imdb_id: Optional[str] = None
    tvdb_id: Optional[int] = None


class Season(BaseModel):
    season_number: int
    episode_count: int = 0
    name: str = ""


class ReleaseDate(BaseModel):
    certification: str = ""
    type: Optional[int] = None


class CountryReleaseDates(BaseModel):
    iso_3166_1: str
    release_dates: List[ReleaseDate] = Field(default_factory=list)


class ContentRating(BaseModel):
    iso_3166_1: str
    rating: str = ""


class MediaDetails(BaseModel):
    """Details for one movie or series."""

    id: int
    media_type: MediaType
    title: str
    original_language: Optional[str] = None
    adult: bool = False
    genres: List[Genre] = Field(default_factory=list)
    keywords: List[Keyword] = Field(default_factory=list)
    external_ids: ExternalIds = Field(default_factory=ExternalIds)
    seasons: List[Season] = Field(default_factory=list)
    release_dates: List[CountryReleaseDates] = Field(default_factory=list)
    content_ratings: List[ContentRating] = Field(default_factory=list)

    @property
    def genre_ids(self) -> List[int]:
        return [genre.id for genre in self.genres]

    @property
    def keyword_ids(self) -> List[int]:
        return [keyword.id for keyword in self.keywords]

    @property
    def is_anime(self) -> bool:
        return self.media_type == MediaType.tv and ANIME_KEYWORD_ID in self.keyword_ids

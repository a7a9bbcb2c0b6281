"""Metadata provider interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import MediaDetails


class MetadataProvider(ABC):
    """Source of movie and series details for the request pipeline."""

    name: str = "provider"

    @abstractmethod
    async def get_movie(self, movie_id: int) -> MediaDetails:
        """Details for a movie by TMDb id."""

    @abstractmethod
    async def get_tv_show(self, tv_id: int) -> MediaDetails:
        """Details for a series by TMDb id."""

    async def close(self) -> None:
        """Release HTTP resources."""

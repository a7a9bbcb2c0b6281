"""
TheMovieDb client.

Only the detail lookups used by the request pipeline are implemented: one call
per title, with external ids, keywords and certifications appended.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from seerr.core.models.domain import MediaType

from .base import MetadataProvider
from .errors import ExternalApiError, MediaNotFoundError
from .externalapi import ExternalAPI
from .models import MediaDetails


class TheMovieDb(ExternalAPI, MetadataProvider):
    """TMDb v3 API client."""

    name = "tmdb"

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        base_url: str = "https://api.themoviedb.org/3",
        language: str = "en",
        timeout: float = 10.0,
        cache_ttl: int = 300,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        params: Dict[str, Any] = {"language": language}
        if api_key:
            params["api_key"] = api_key
        super().__init__(base_url, params=params, timeout=timeout, cache_ttl=cache_ttl, client=client)

    async def _details(self, kind: str, media_id: int, append: str) -> Dict[str, Any]:
        try:
            return await self.get(f"/{kind}/{media_id}", params={"append_to_response": append})
        except ExternalApiError as e:
            if e.status_code == 404:
                raise MediaNotFoundError(kind, media_id) from e
            raise

    async def get_movie(self, movie_id: int) -> MediaDetails:
        data = await self._details("movie", movie_id, "external_ids,keywords,release_dates")
        return MediaDetails(
            id=data["id"],
            media_type=MediaType.movie,
            title=data.get("title") or data.get("original_title") or "",
            original_language=data.get("original_language"),
            adult=bool(data.get("adult", False)),
            genres=data.get("genres") or [],
            keywords=(data.get("keywords") or {}).get("keywords") or [],
            external_ids={
                "imdb_id": (data.get("external_ids") or {}).get("imdb_id") or data.get("imdb_id"),
            },
            release_dates=(data.get("release_dates") or {}).get("results") or [],
        )

    async def get_tv_show(self, tv_id: int) -> MediaDetails:
        data = await self._details("tv", tv_id, "external_ids,keywords,content_ratings")
        external_ids = data.get("external_ids") or {}
        return MediaDetails(
            id=data["id"],
            media_type=MediaType.tv,
            title=data.get("name") or data.get("original_name") or "",
            original_language=data.get("original_language"),
            genres=data.get("genres") or [],
            keywords=(data.get("keywords") or {}).get("results") or [],
            external_ids={"imdb_id": external_ids.get("imdb_id"), "tvdb_id": external_ids.get("tvdb_id")},
            seasons=[
                {
                    "season_number": season["season_number"],
                    "episode_count": season.get("episode_count") or 0,
                    "name": season.get("name") or "",
                }
                for season in data.get("seasons") or []
            ],
            content_ratings=(data.get("content_ratings") or {}).get("results") or [],
        )

"""
TheTVDB client.

Series details start from TMDb (ids, genres, keywords) and have their season
list replaced by TheTVDB's official season order. Any TVDB failure falls back
to the TMDb data.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from .base import MetadataProvider
from .errors import ExternalApiError
from .externalapi import ExternalAPI
from .models import MediaDetails, Season
from .tmdb import TheMovieDb

SERIES_CACHE_TTL = 43200


class Tvdb(ExternalAPI, MetadataProvider):
    """TheTVDB v4 API client."""

    name = "tvdb"

    def __init__(
        self,
        api_key: str,
        tmdb: TheMovieDb,
        *,
        pin: Optional[str] = None,
        base_url: str = "https://api4.thetvdb.com/v4",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        super().__init__(base_url, timeout=timeout, cache_ttl=SERIES_CACHE_TTL, client=client)
        self.api_key = api_key
        self.pin = pin
        self.tmdb = tmdb
        self.token: Optional[str] = None

    async def login(self) -> str:
        body: Dict[str, Any] = {"apikey": self.api_key}
        if self.pin:
            body["pin"] = self.pin
        response = await self.post("/login", body=body)
        self.token = response["data"]["token"]
        return self.token

    async def close(self) -> None:
        await self.tmdb.close()
        await super().close()

    async def get_movie(self, movie_id: int) -> MediaDetails:
        return await self.tmdb.get_movie(movie_id)

    async def get_tv_show(self, tv_id: int) -> MediaDetails:
        details = await self.tmdb.get_tv_show(tv_id)
        tvdb_id = details.external_ids.tvdb_id
        if not tvdb_id:
            return details
        try:
            seasons = await self._official_seasons(tvdb_id)
        except ExternalApiError as e:
            self._logger.warning(f"TVDB lookup failed for series {tvdb_id}, using TMDb seasons: {e}")
            return details
        if not seasons:
            return details
        return details.model_copy(update={"seasons": seasons})

    async def _official_seasons(self, tvdb_id: int) -> List[Season]:
        if self.token is None:
            await self.login()
        response = await self.get(
            f"/series/{tvdb_id}/extended",
            params={"meta": "episodes", "short": "true"},
            headers={"Authorization": f"Bearer {self.token}"},
        )
        data = response.get("data") or {}
        episodes = data.get("episodes") or []
        seasons: List[Season] = []
        for season in sorted(data.get("seasons") or [], key=lambda s: s.get("number", -1)):
            number = season.get("number")
            if (season.get("type") or {}).get("type") != "official" or number is None or number < 0:
                continue
            seasons.append(
                Season(
                    season_number=number,
                    episode_count=sum(1 for episode in episodes if episode.get("seasonNumber") == number),
                    name=str(number),
                )
            )
        return seasons

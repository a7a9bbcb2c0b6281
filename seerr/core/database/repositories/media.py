"""
Media repository.

Lookups by external id and status updates for tracked media items.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.media import Media
from .base import BaseRepository, QueryBuilder


class MediaRepository(BaseRepository[Media]):
    """Repository for media data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Media)

    async def get_by_tmdb_id(self, tmdb_id: int, media_type: str) -> Optional[Media]:
        """Get a media item by its TMDb id and type.

        Args:
            tmdb_id: TMDb identifier (Hardcover id for books)
            media_type: movie, tv or book

        Returns:
            Media instance or None
        """
        column = Media.hc_id if media_type == "book" else Media.tmdb_id
        stmt = select(Media).where(column == tmdb_id, Media.media_type == media_type)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[Media]:
        stmt = QueryBuilder.apply_filters(select(Media), Media, filters or {}).order_by(Media.id)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

"""
Blocklist repository.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.blocklist import Blocklist
from .base import BaseRepository, QueryBuilder


class BlocklistRepository(BaseRepository[Blocklist]):
    """Repository for blocklist data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Blocklist)

    async def get_by_tmdb_id(self, tmdb_id: int, media_type: str) -> Optional[Blocklist]:
        stmt = select(Blocklist).where(Blocklist.tmdb_id == tmdb_id, Blocklist.media_type == media_type)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[Blocklist]:
        """List entries newest first.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: ``search`` (title substring), ``manual`` (only entries
                without blocklisted tags), ``blocklisted_tags`` (only entries
                added by tag), plus equality filters such as ``media_type``

        Returns:
            List of Blocklist instances
        """
        stmt = self._filtered(select(Blocklist), filters).order_by(Blocklist.created_at.desc(), Blocklist.id.desc())
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        return await self._count(self._filtered(self._count_stmt(), filters))

    def _filtered(self, stmt, filters: Optional[Dict[str, Any]]):
        filters = dict(filters or {})
        stmt = QueryBuilder.apply_search(stmt, [Blocklist.title], filters.pop("search", None))
        if filters.pop("manual", False):
            stmt = stmt.where(Blocklist.blocklisted_tags.is_(None))
        if filters.pop("blocklisted_tags", False):
            stmt = stmt.where(Blocklist.blocklisted_tags.is_not(None))
        return QueryBuilder.apply_filters(stmt, Blocklist, filters)

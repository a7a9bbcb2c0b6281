"""
Media request repository.

Listing, duplicate detection and quota usage queries for media requests.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from seerr.core.models.domain import MediaRequestStatus

from ..entities.media_requests import MediaRequest
from .base import BaseRepository, QueryBuilder

# Named filters accepted by GET /request
REQUEST_FILTERS = {
    "all": None,
    "pending": [MediaRequestStatus.PENDING],
    "approved": [MediaRequestStatus.APPROVED],
    "processing": [MediaRequestStatus.APPROVED],
    "declined": [MediaRequestStatus.DECLINED],
    "failed": [MediaRequestStatus.FAILED],
    "completed": [MediaRequestStatus.COMPLETED],
    "unavailable": [MediaRequestStatus.PENDING, MediaRequestStatus.APPROVED, MediaRequestStatus.FAILED],
}


class MediaRequestRepository(BaseRepository[MediaRequest]):
    """Repository for media request data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, MediaRequest)

    async def list(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[MediaRequest]:
        """List requests, newest first unless ``sort`` is "modified".

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: ``statuses`` (list of MediaRequestStatus), ``requested_by_id``,
                ``type``, ``media_id``, ``sort`` ("added" or "modified")

        Returns:
            List of MediaRequest instances
        """
        filters = dict(filters or {})
        sort = filters.pop("sort", "added")
        stmt = self._filtered(select(MediaRequest), filters)
        order_column = MediaRequest.updated_at if sort == "modified" else MediaRequest.created_at
        stmt = stmt.order_by(order_column.desc(), MediaRequest.id.desc())
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        filters = dict(filters or {})
        filters.pop("sort", None)
        return await self._count(self._filtered(self._count_stmt(), filters))

    async def list_for_media(self, media_id: int, *, is_4k: Optional[bool] = None) -> List[MediaRequest]:
        stmt = select(MediaRequest).where(MediaRequest.media_id == media_id)
        if is_4k is not None:
            stmt = stmt.where(MediaRequest.is_4k == is_4k)
        result = await self.session.execute(stmt.order_by(MediaRequest.id))
        return list(result.scalars().all())

    async def list_usage(self, user_id: int, media_type: str, since: Optional[datetime] = None) -> List[MediaRequest]:
        """Non-declined requests of ``media_type`` made by a user, optionally after ``since``."""
        stmt = select(MediaRequest).where(
            MediaRequest.requested_by_id == user_id,
            MediaRequest.type == media_type,
            MediaRequest.status != MediaRequestStatus.DECLINED,
        )
        if since is not None:
            stmt = stmt.where(MediaRequest.created_at > since)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    def _filtered(self, stmt, filters: Dict[str, Any]):
        statuses: Optional[Iterable[int]] = filters.pop("statuses", None)
        stmt = QueryBuilder.apply_in(stmt, MediaRequest.status, [int(s) for s in statuses] if statuses else None)
        return QueryBuilder.apply_filters(stmt, MediaRequest, filters)

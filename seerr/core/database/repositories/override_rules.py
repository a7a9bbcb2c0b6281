"""
Override rule repository.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.override_rules import OverrideRule
from .base import BaseRepository, QueryBuilder


class OverrideRuleRepository(BaseRepository[OverrideRule]):
    """Repository for override rule data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, OverrideRule)

    async def list(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[OverrideRule]:
        """List override rules in id order.

        Filters on ``radarr_service_id``/``sonarr_service_id`` select the rules
        attached to one instance index.
        """
        stmt = QueryBuilder.apply_filters(select(OverrideRule), OverrideRule, filters or {})
        stmt = QueryBuilder.apply_pagination(stmt.order_by(OverrideRule.id), limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

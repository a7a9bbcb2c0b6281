"""
Routing rule repository.

Ordered rule lookups used by the routing resolver and the settings API.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.routing_rules import RoutingRule
from .base import BaseRepository, QueryBuilder


class RoutingRuleRepository(BaseRepository[RoutingRule]):
    """Repository for routing rule data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, RoutingRule)

    async def list(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[RoutingRule]:
        """List rules with fallbacks last and higher priorities first."""
        stmt = QueryBuilder.apply_filters(select(RoutingRule), RoutingRule, filters or {})
        stmt = stmt.order_by(RoutingRule.is_fallback.asc(), RoutingRule.priority.desc(), RoutingRule.id.asc())
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_service(self, service_type: str, is_4k: bool) -> List[RoutingRule]:
        """Rules for one service type and quality, in evaluation order."""
        stmt = (
            select(RoutingRule)
            .where(RoutingRule.service_type == service_type, RoutingRule.is_4k == is_4k)
            .order_by(RoutingRule.priority.desc(), RoutingRule.id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_fallback(self, service_type: str, is_4k: bool) -> Optional[RoutingRule]:
        stmt = select(RoutingRule).where(
            RoutingRule.service_type == service_type,
            RoutingRule.is_4k == is_4k,
            RoutingRule.is_fallback == True,  # noqa: E712
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def max_priority(self, service_type: str, is_4k: bool) -> int:
        """Highest priority among non-fallback rules, 0 when there are none."""
        stmt = select(func.max(RoutingRule.priority)).where(
            RoutingRule.service_type == service_type,
            RoutingRule.is_4k == is_4k,
            RoutingRule.is_fallback == False,  # noqa: E712
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one_or_none() or 0)

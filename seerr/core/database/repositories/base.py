"""
Base repository and query helpers.

Every repository wraps one SQLModel entity and an ``AsyncSession``. Lookups by
primary key, deletes, saves and counts are shared here; each repository adds
its own ordering and the lookups its callers need.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Iterable, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from ..base import utc_now

EntityType = TypeVar("EntityType", bound=SQLModel)


class BaseRepository(ABC, Generic[EntityType]):
    """Common CRUD operations for one SQLModel entity with an integer ``id``."""

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        self.session = session
        self.model = model

    @abstractmethod
    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EntityType]:
        """List entities in the repository's natural order.

        Args:
            limit: Maximum number of records to return
            offset: Number of records to skip
            filters: Field filters; each repository documents the keys it accepts

        Returns:
            List of entity instances
        """

    async def create(self, entity: EntityType) -> EntityType:
        return await self._save(entity)

    async def get_by_id(self, entity_id: int) -> Optional[EntityType]:
        result = await self.session.execute(select(self.model).where(self.model.id == entity_id))
        return result.scalar_one_or_none()

    async def update(self, entity: EntityType) -> EntityType:
        """Persist changes, stamping ``updated_at`` when the entity has one."""
        if hasattr(entity, "updated_at"):
            entity.updated_at = utc_now()
        return await self._save(entity)

    async def delete(self, entity_id: int) -> bool:
        """Delete by primary key.

        Returns:
            True if deleted, False if not found
        """
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return False
        await self.session.delete(entity)
        await self.session.commit()
        return True

    async def _save(self, entity: EntityType) -> EntityType:
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def _count(self, stmt) -> int:
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    def _count_stmt(self):
        return select(func.count()).select_from(self.model)


class QueryBuilder:
    """Statement helpers shared by the repositories."""

    @staticmethod
    def apply_filters(stmt, model: Type[EntityType], filters: Dict[str, Any]):
        """Apply equality filters.

        Keys that are not columns of ``model`` and ``None`` values are ignored.
        """
        for key, value in filters.items():
            if value is not None and hasattr(model, key):
                stmt = stmt.where(getattr(model, key) == value)
        return stmt

    @staticmethod
    def apply_search(stmt, columns: Sequence[Any], term: Optional[str]):
        """Case-insensitive substring match on any of ``columns``; empty terms are ignored."""
        if not term:
            return stmt
        pattern = f"%{term.lower()}%"
        return stmt.where(or_(*(func.lower(column).like(pattern) for column in columns)))

    @staticmethod
    def apply_in(stmt, column: Any, values: Optional[Iterable[Any]]):
        """Restrict ``column`` to ``values``; None or empty leaves the statement unchanged."""
        values = list(values or [])
        if not values:
            return stmt
        return stmt.where(column.in_(values))

    @staticmethod
    def apply_pagination(stmt, limit: Optional[int], offset: Optional[int]):
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        return stmt

"""
User repository.

Data access for user accounts, including lookups by email and paged listing.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.users import User
from .base import BaseRepository, QueryBuilder


class UserRepository(BaseRepository[User]):
    """Repository for user data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def create(self, user: User) -> User:
        user.email = user.email.lower()
        return await self._save(user)

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def list(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[User]:
        """List users ordered by id.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: Equality filters (user_type) plus ``q`` for a
                case-insensitive email/username search

        Returns:
            List of User instances
        """
        stmt = self._filtered(select(User), filters).order_by(User.id)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        return await self._count(self._filtered(self._count_stmt(), filters))

    def _filtered(self, stmt, filters: Optional[Dict[str, Any]]):
        filters = dict(filters or {})
        stmt = QueryBuilder.apply_search(stmt, [User.email, User.username], filters.pop("q", None))
        return QueryBuilder.apply_filters(stmt, User, filters)

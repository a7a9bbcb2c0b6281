"""
Request quotas.

A user is limited either per media type ("split" mode) or by one shared
allowance ("combined" mode). User-level values win over the global defaults
in ``main.defaultQuotas``; users who can manage other users are never limited.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Literal, Optional

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from seerr.core.database import utc_now
from seerr.core.database.entities import User
from seerr.core.database.repositories import MediaRequestRepository
from seerr.core.models.domain import MediaType
from seerr.core.permissions import Permission, has_permission
from seerr.core.settings import SettingsStore

QuotaMode = Literal["split", "combined"]


class QuotaStatus(BaseModel):
    days: Optional[int] = None
    limit: Optional[int] = None
    used: int = 0
    remaining: Optional[int] = None
    restricted: bool = False


class QuotaResponse(BaseModel):
    mode: QuotaMode
    movie: QuotaStatus
    tv: QuotaStatus
    combined: QuotaStatus


def _configured(*values: Optional[int]) -> bool:
    return any(value is not None for value in values)


def _status(limit: int, used: int, days: Optional[int]) -> QuotaStatus:
    return QuotaStatus(
        days=days,
        limit=limit,
        used=used,
        remaining=max(0, limit - used) if limit else None,
        restricted=bool(limit) and limit - used <= 0,
    )


async def _usage(session: AsyncSession, user_id: int, media_type: str, days: Optional[int]) -> int:
    since = utc_now() - timedelta(days=days) if days else None
    requests = await MediaRequestRepository(session).list_usage(user_id, media_type, since)
    if media_type == MediaType.tv:
        return sum(request.season_count for request in requests)
    return len(requests)


def quota_mode(user: User, store: SettingsStore) -> QuotaMode:
    defaults = store.main.default_quotas
    if _configured(user.combined_quota_limit, user.combined_quota_days):
        return "combined"
    if _configured(user.movie_quota_limit, user.movie_quota_days, user.tv_quota_limit, user.tv_quota_days):
        return "split"
    if defaults.combined is not None and _configured(defaults.combined.quota_limit, defaults.combined.quota_days):
        return "combined"
    return "split"


async def get_quota(session: AsyncSession, user: User, store: SettingsStore) -> QuotaResponse:
    """Current quota usage for a user.

    Movie requests count once each; series requests count one per requested
    season. Declined requests never count.

    Args:
        session: Database session
        user: The user whose quota is computed
        store: Settings store providing the default quotas

    Returns:
        Quota status for movies, series and the combined allowance
    """
    defaults = store.main.default_quotas
    can_bypass = has_permission(Permission.MANAGE_USERS, user.permissions, check_type="or")
    mode = quota_mode(user, store)

    if mode == "split":
        movie_limit = 0 if can_bypass else (
            user.movie_quota_limit if user.movie_quota_limit is not None else defaults.movie.quota_limit
        ) or 0
        movie_days = user.movie_quota_days if user.movie_quota_days is not None else defaults.movie.quota_days
        tv_limit = 0 if can_bypass else (
            user.tv_quota_limit if user.tv_quota_limit is not None else defaults.tv.quota_limit
        ) or 0
        tv_days = user.tv_quota_days if user.tv_quota_days is not None else defaults.tv.quota_days

        movie_used = await _usage(session, user.id, MediaType.movie, movie_days) if movie_limit else 0
        tv_used = await _usage(session, user.id, MediaType.tv, tv_days) if tv_limit else 0
        return QuotaResponse(
            mode=mode,
            movie=_status(movie_limit, movie_used, movie_days),
            tv=_status(tv_limit, tv_used, tv_days),
            combined=QuotaStatus(),
        )

    if _configured(user.combined_quota_limit, user.combined_quota_days):
        combined_limit, combined_days = user.combined_quota_limit, user.combined_quota_days
    else:
        combined_limit, combined_days = defaults.combined.quota_limit, defaults.combined.quota_days
    combined_limit = 0 if can_bypass else combined_limit or 0

    combined_used = 0
    if combined_limit:
        combined_used = await _usage(session, user.id, MediaType.movie, combined_days) + await _usage(
            session, user.id, MediaType.tv, combined_days
        )
    return QuotaResponse(
        mode=mode,
        movie=QuotaStatus(),
        tv=QuotaStatus(),
        combined=QuotaStatus(
            days=combined_days,
            limit=combined_limit,
            used=combined_used,
            remaining=max(0, combined_limit - combined_used) if combined_limit else None,
            restricted=bool(combined_limit) and combined_limit - combined_used <= 0,
        ),
    )

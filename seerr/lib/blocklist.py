"""
Blocklist management.

Blocklisting a title also marks its Media row BLOCKLISTED in both qualities
so new requests for it are refused.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from seerr.core.database.entities import Blocklist, Media
from seerr.core.database.repositories import BlocklistRepository, MediaRepository
from seerr.core.logging_config import get_logger
from seerr.core.models.domain import MediaStatus

logger = get_logger(__name__)


class BlocklistConflictError(Exception):
    """The title is already blocklisted."""


class BlocklistNotFoundError(Exception):
    """No blocklist entry for the title."""


def is_unique_violation(error: IntegrityError) -> bool:
    """True for unique-constraint failures (SQLite and Postgres wording), False for foreign keys and others."""
    message = str(error.orig).lower()
    return "unique constraint" in message or "duplicate key" in message


async def add_to_blocklist(
    session: AsyncSession,
    media_type: str,
    tmdb_id: int,
    title: Optional[str],
    user_id: Optional[int],
    blocklisted_tags: Optional[str] = None,
) -> Blocklist:
    """Blocklist a title and mark its media row.

    Raises:
        BlocklistConflictError: The title is already blocklisted
    """
    repo = BlocklistRepository(session)
    if await repo.get_by_tmdb_id(tmdb_id, media_type) is not None:
        raise BlocklistConflictError(f"{media_type} {tmdb_id} is already blocklisted")

    media_repo = MediaRepository(session)
    media = await media_repo.get_by_tmdb_id(tmdb_id, media_type)
    if media is None:
        media = Media(media_type=media_type, tmdb_id=tmdb_id)
    media.status = int(MediaStatus.BLOCKLISTED)
    media.status_4k = int(MediaStatus.BLOCKLISTED)

    # Media and entry are written in one transaction
    try:
        session.add(media)
        await session.flush()
        entry = Blocklist(
            media_type=media_type,
            tmdb_id=tmdb_id,
            title=title,
            user_id=user_id,
            media_id=media.id,
            blocklisted_tags=blocklisted_tags,
        )
        session.add(entry)
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        if is_unique_violation(e):
            raise BlocklistConflictError(f"{media_type} {tmdb_id} is already blocklisted") from e
        raise
    await session.refresh(entry)
    logger.info(f"Blocklisted {media_type} {tmdb_id} ({title})")
    return entry


async def remove_from_blocklist(session: AsyncSession, tmdb_id: int, media_type: str) -> None:
    """Remove a blocklist entry together with the blocklisted media row.

    Raises:
        BlocklistNotFoundError: The title is not blocklisted
    """
    repo = BlocklistRepository(session)
    entry = await repo.get_by_tmdb_id(tmdb_id, media_type)
    if entry is None:
        raise BlocklistNotFoundError(f"{media_type} {tmdb_id} is not blocklisted")

    await repo.delete(entry.id)
    media_repo = MediaRepository(session)
    media = await media_repo.get_by_tmdb_id(tmdb_id, media_type)
    if media is not None and media.status == MediaStatus.BLOCKLISTED:
        await media_repo.delete(media.id)
    logger.info(f"Removed {media_type} {tmdb_id} from the blocklist")

"""Unit tests for the blocklist repository."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from seerr.core.database.entities import Blocklist
from seerr.core.database.repositories import BlocklistRepository

pytestmark = pytest.mark.asyncio


@pytest.fixture
def repository(session):
    return BlocklistRepository(session)


async def _seed(repository):
    await repository.create(Blocklist(media_type="movie", tmdb_id=1, title="The Matrix"))
    await repository.create(Blocklist(media_type="tv", tmdb_id=2, title="Matrix Academy", blocklisted_tags="18"))
    await repository.create(Blocklist(media_type="movie", tmdb_id=3, title="Inception"))


async def test_get_by_tmdb_id(repository):
    await _seed(repository)

    assert (await repository.get_by_tmdb_id(2, "tv")).title == "Matrix Academy"
    assert await repository.get_by_tmdb_id(2, "movie") is None


async def test_search_is_case_insensitive(repository):
    await _seed(repository)

    titles = {e.title for e in await repository.list(filters={"search": "matrix"})}

    assert titles == {"The Matrix", "Matrix Academy"}
    assert await repository.count(filters={"search": "MATRIX"}) == 2


async def test_manual_and_tag_filters(repository):
    await _seed(repository)

    assert await repository.count(filters={"manual": True}) == 2
    assert [e.tmdb_id for e in await repository.list(filters={"blocklisted_tags": True})] == [2]
    assert await repository.count(filters={"media_type": "movie"}) == 2


async def test_pagination_newest_first(repository):
    await _seed(repository)

    page = await repository.list(limit=1)

    assert [e.tmdb_id for e in page] == [3]


async def test_duplicate_entry_violates_unique_constraint(repository, session):
    await repository.create(Blocklist(media_type="movie", tmdb_id=1, title="The Matrix"))

    with pytest.raises(IntegrityError):
        await repository.create(Blocklist(media_type="movie", tmdb_id=1, title="Again"))
    await session.rollback()

"""Integration tests for the SQLAlchemy repositories on a temporary SQLite file."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from series_matcher.infrastructure.db.models import UserFavoriteSeries
from series_matcher.repositories.favorite_series_repository_sqlalchemy import SqlAlchemyFavoriteSeriesRepository
from series_matcher.repositories.ignored_series_repository_sqlalchemy import SqlAlchemyIgnoredSeriesRepository
from series_matcher.services.favorite_series_actions import GetFavoriteSeriesAction, GetFavoriteSeriesPayload
from series_matcher.services.ignored_series_actions import (
    AddIgnoredSeriesAction,
    GetUserIgnoredSeriesAction,
    GetUserIgnoredSeriesPayload,
    RemoveIgnoredSeriesAction,
)


@pytest.fixture
def favorites(sessionmaker) -> SqlAlchemyFavoriteSeriesRepository:
    return SqlAlchemyFavoriteSeriesRepository(sessionmaker=sessionmaker, timeout_seconds=5.0)


@pytest.fixture
def ignored(sessionmaker) -> SqlAlchemyIgnoredSeriesRepository:
    return SqlAlchemyIgnoredSeriesRepository(sessionmaker=sessionmaker, timeout_seconds=5.0)


@pytest.mark.asyncio
async def test_create_then_find_one_round_trips(favorites):
    created = await favorites.create(user_id="u1", series_tmdb_id=1396)

    found = await favorites.find_one("u1", 1396)

    assert found is not None
    assert found.id == created.id
    assert found.user_id == "u1"
    assert found.series_tmdb_id == 1396
    assert isinstance(found.added_at, datetime)
    assert await favorites.find_one("u1", 9999) is None
    assert await favorites.find_one("u2", 1396) is None


@pytest.mark.asyncio
async def test_duplicate_create_propagates_integrity_error(favorites):
    await favorites.create(user_id="u1", series_tmdb_id=1396)

    with pytest.raises(IntegrityError):
        await favorites.create(user_id="u1", series_tmdb_id=1396)

    assert await favorites.count("u1") == 1


@pytest.mark.asyncio
async def test_find_many_orders_newest_first_and_paginates(favorites, sessionmaker):
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    async with sessionmaker() as session:
        for offset, tmdb_id in enumerate([10, 20, 30, 40, 50]):
            session.add(
                UserFavoriteSeries(user_id="u1", series_tmdb_id=tmdb_id, added_at=base + timedelta(minutes=offset))
            )
        session.add(UserFavoriteSeries(user_id="u2", series_tmdb_id=99, added_at=base))
        await session.commit()

    first = await favorites.find_many("u1", 1, 2)
    second = await favorites.find_many("u1", 2, 2)
    third = await favorites.find_many("u1", 3, 2)
    beyond = await favorites.find_many("u1", 4, 2)

    assert [f.series_tmdb_id for f in first] == [50, 40]
    assert [f.series_tmdb_id for f in second] == [30, 20]
    assert [f.series_tmdb_id for f in third] == [10]
    assert beyond == []
    assert await favorites.count("u1") == 5
    assert await favorites.count("u2") == 1


@pytest.mark.asyncio
async def test_delete_removes_only_matching_row(ignored):
    await ignored.create(user_id="u1", series_tmdb_id=60059)
    await ignored.create(user_id="u1", series_tmdb_id=1396)
    await ignored.create(user_id="u2", series_tmdb_id=60059)

    await ignored.delete("u1", 60059)

    assert await ignored.find_one("u1", 60059) is None
    assert await ignored.find_one("u1", 1396) is not None
    assert await ignored.find_one("u2", 60059) is not None


@pytest.mark.asyncio
async def test_get_favorites_action_reads_concurrently_from_separate_sessions(favorites):
    for tmdb_id in (1396, 1399, 60059):
        await favorites.create(user_id="u1", series_tmdb_id=tmdb_id)

    result = await GetFavoriteSeriesAction(repository=favorites).execute(
        GetFavoriteSeriesPayload(user_id="u1", page=1, page_size=10)
    )

    assert len(result.data) == 3
    assert result.total == 3


@pytest.mark.asyncio
async def test_ignored_actions_end_to_end(ignored):
    add = AddIgnoredSeriesAction(repository=ignored)
    remove = RemoveIgnoredSeriesAction(repository=ignored)
    get = GetUserIgnoredSeriesAction(repository=ignored)

    created = await add.execute("u1", 60059)
    listed = await get.execute(GetUserIgnoredSeriesPayload(user_id="u1", page=1, page_size=20))
    await remove.execute("u1", 60059)
    after = await get.execute(GetUserIgnoredSeriesPayload(user_id="u1", page=1, page_size=20))

    assert [i.id for i in listed.data] == [created.id]
    assert listed.total == 1
    assert after.data == []
    assert after.total == 0

"""Unit tests for the favorite-series actions against an in-memory repository."""

from __future__ import annotations

import asyncio
import logging

import pytest

from series_matcher.core.errors import ResourceAlreadyExistsError, ResourceNotFoundError
from series_matcher.services.favorite_series_actions import (
    AddFavoriteSeriesAction,
    GetFavoriteSeriesAction,
    GetFavoriteSeriesPayload,
    RemoveFavoriteSeriesAction,
)
from tests.support.memory_repositories import MemoryFavoriteSeriesRepository

ACTIONS_LOGGER = "series_matcher.services.favorite_series_actions"


@pytest.mark.asyncio
async def test_add_favorite_on_empty_store_returns_created_record(favorite_repo):
    action = AddFavoriteSeriesAction(repository=favorite_repo)

    favorite = await action.execute("u1", 1396)

    assert favorite.user_id == "u1"
    assert favorite.series_tmdb_id == 1396
    assert favorite.id is not None
    assert favorite.added_at is not None
    assert favorite_repo.call_names() == ["find_one", "create"]


@pytest.mark.asyncio
async def test_add_favorite_twice_raises_and_keeps_single_entry(favorite_repo):
    action = AddFavoriteSeriesAction(repository=favorite_repo)
    await action.execute("u1", 1396)

    with pytest.raises(ResourceAlreadyExistsError) as excinfo:
        await action.execute("u1", 1396)

    err = excinfo.value
    assert err.resource == "Favorite Series"
    assert err.reason == "Series is already in favorites"
    assert err.context == {"user_id": "u1", "series_tmdb_id": "1396"}
    assert err.http_status == 409
    assert await favorite_repo.count("u1") == 1
    assert favorite_repo.call_names().count("create") == 1


@pytest.mark.asyncio
async def test_same_series_can_be_favorited_by_different_users(favorite_repo):
    action = AddFavoriteSeriesAction(repository=favorite_repo)

    await action.execute("u1", 1396)
    await action.execute("u2", 1396)

    assert await favorite_repo.count("u1") == 1
    assert await favorite_repo.count("u2") == 1


@pytest.mark.asyncio
async def test_add_favorite_logs_only_on_success(favorite_repo, caplog):
    action = AddFavoriteSeriesAction(repository=favorite_repo)

    with caplog.at_level(logging.INFO, logger=ACTIONS_LOGGER):
        await action.execute("u1", 1396)
        with pytest.raises(ResourceAlreadyExistsError):
            await action.execute("u1", 1396)

    records = [r for r in caplog.records if r.name == ACTIONS_LOGGER]
    assert len(records) == 1
    assert records[0].getMessage() == "favorite_series_added"
    assert records[0].user_id == "u1"
    assert records[0].series_tmdb_id == 1396


@pytest.mark.asyncio
async def test_add_favorite_uses_injected_logger(favorite_repo, caplog):
    injected = logging.getLogger("tests.injected")
    action = AddFavoriteSeriesAction(repository=favorite_repo, logger=injected)

    with caplog.at_level(logging.INFO, logger="tests.injected"):
        await action.execute("u1", 7)

    assert [r.name for r in caplog.records] == ["tests.injected"]


@pytest.mark.asyncio
async def test_add_favorite_propagates_repository_failure_unchanged():
    class BrokenRepository(MemoryFavoriteSeriesRepository):
        async def create(self, *, user_id: str, series_tmdb_id: int):
            raise ConnectionError("db down")

    action = AddFavoriteSeriesAction(repository=BrokenRepository())

    with pytest.raises(ConnectionError, match="db down"):
        await action.execute("u1", 1396)


@pytest.mark.asyncio
async def test_get_favorites_returns_page_and_total(favorite_repo):
    favorite_repo.seed("u1", 1396, 1399, 60059)
    favorite_repo.seed("u2", 42)
    action = GetFavoriteSeriesAction(repository=favorite_repo)

    result = await action.execute(GetFavoriteSeriesPayload(user_id="u1", page=1, page_size=10))

    assert len(result.data) == 3
    assert result.total == 3
    assert {f.series_tmdb_id for f in result.data} == {1396, 1399, 60059}


@pytest.mark.asyncio
@pytest.mark.parametrize("page,page_size", [(1, 1), (1, 2), (2, 2), (3, 2), (5, 10)])
async def test_get_favorites_page_never_exceeds_page_size(favorite_repo, page, page_size):
    favorite_repo.seed("u1", 1, 2, 3, 4, 5)
    action = GetFavoriteSeriesAction(repository=favorite_repo)

    result = await action.execute(GetFavoriteSeriesPayload(user_id="u1", page=page, page_size=page_size))

    assert len(result.data) <= page_size
    assert result.total >= len(result.data)
    assert result.total == 5


@pytest.mark.asyncio
async def test_get_favorites_passes_pagination_through_unvalidated(favorite_repo):
    action = GetFavoriteSeriesAction(repository=favorite_repo)

    await action.execute(GetFavoriteSeriesPayload(user_id="u1", page=0, page_size=-5))

    assert ("find_many", ("u1", 0, -5)) in favorite_repo.calls


@pytest.mark.asyncio
async def test_get_favorites_issues_both_reads_concurrently():
    count_started = asyncio.Event()

    class GatedRepository(MemoryFavoriteSeriesRepository):
        async def find_many(self, user_id: str, page: int, page_size: int):
            # Only completes if count() runs while this read is suspended.
            await asyncio.wait_for(count_started.wait(), timeout=1.0)
            return await super().find_many(user_id, page, page_size)

        async def count(self, user_id: str) -> int:
            count_started.set()
            return await super().count(user_id)

    repo = GatedRepository()
    repo.seed("u1", 1396)
    action = GetFavoriteSeriesAction(repository=repo)

    result = await action.execute(GetFavoriteSeriesPayload(user_id="u1", page=1, page_size=10))

    assert result.total == 1
    assert sorted(repo.call_names()) == ["count", "find_many"]


@pytest.mark.asyncio
async def test_remove_favorite_deletes_existing_entry(favorite_repo, caplog):
    favorite_repo.seed("u1", 1396, 1399)
    action = RemoveFavoriteSeriesAction(repository=favorite_repo)

    with caplog.at_level(logging.INFO, logger=ACTIONS_LOGGER):
        result = await action.execute("u1", 1396)

    assert result is None
    assert [f.series_tmdb_id for f in favorite_repo.rows] == [1399]
    assert any(r.getMessage() == "favorite_series_removed" for r in caplog.records)


@pytest.mark.asyncio
async def test_remove_missing_favorite_raises_not_found_without_delete(favorite_repo):
    action = RemoveFavoriteSeriesAction(repository=favorite_repo)

    with pytest.raises(ResourceNotFoundError) as excinfo:
        await action.execute("u1", 1396)

    assert excinfo.value.resource == "Favorite Series"
    assert excinfo.value.reason == "Series not found in favorites"
    assert "delete" not in favorite_repo.call_names()

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from series_matcher.core.errors import ResourceAlreadyExistsError, ResourceNotFoundError
from series_matcher.domain.entities import IgnoredSeries
from series_matcher.domain.ports.ignored_series_repository import IgnoredSeriesRepository

_RESOURCE = "Ignored Series"


@dataclass(frozen=True)
class GetUserIgnoredSeriesPayload:
    user_id: str
    page: int
    page_size: int


@dataclass(frozen=True)
class GetUserIgnoredSeriesResult:
    data: list[IgnoredSeries]
    total: int


class AddIgnoredSeriesAction:
    def __init__(self, *, repository: IgnoredSeriesRepository) -> None:
        self._repo = repository

    async def execute(self, user_id: str, series_tmdb_id: int) -> IgnoredSeries:
        existing = await self._repo.find_one(user_id, series_tmdb_id)
        if existing is not None:
            raise ResourceAlreadyExistsError(
                _RESOURCE,
                "Series is already in ignored list",
                user_id=user_id,
                series_tmdb_id=series_tmdb_id,
            )

        return await self._repo.create(user_id=user_id, series_tmdb_id=series_tmdb_id)


class GetUserIgnoredSeriesAction:
    def __init__(self, *, repository: IgnoredSeriesRepository) -> None:
        self._repo = repository

    async def execute(self, payload: GetUserIgnoredSeriesPayload) -> GetUserIgnoredSeriesResult:
        ignored, total = await asyncio.gather(
            self._repo.find_many(payload.user_id, payload.page, payload.page_size),
            self._repo.count(payload.user_id),
        )
        return GetUserIgnoredSeriesResult(data=list(ignored), total=int(total))


class RemoveIgnoredSeriesAction:
    def __init__(self, *, repository: IgnoredSeriesRepository) -> None:
        self._repo = repository

    async def execute(self, user_id: str, series_tmdb_id: int) -> None:
        existing = await self._repo.find_one(user_id, series_tmdb_id)
        if existing is None:
            raise ResourceNotFoundError(_RESOURCE, user_id=user_id, series_tmdb_id=series_tmdb_id)

        await self._repo.delete(user_id, series_tmdb_id)

from __future__ import annotations

from typing import Protocol

from series_matcher.domain.entities import IgnoredSeries


class IgnoredSeriesRepository(Protocol):
    async def find_one(self, user_id: str, series_tmdb_id: int) -> IgnoredSeries | None:
        ...

    async def create(self, *, user_id: str, series_tmdb_id: int) -> IgnoredSeries:
        ...

    async def find_many(self, user_id: str, page: int, page_size: int) -> list[IgnoredSeries]:
        ...

    async def count(self, user_id: str) -> int:
        ...

    async def delete(self, user_id: str, series_tmdb_id: int) -> None:
        ...

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from series_matcher.core.errors import ResourceAlreadyExistsError, ResourceNotFoundError
from series_matcher.domain.entities import FavoriteSeries
from series_matcher.domain.ports.favorite_series_repository import FavoriteSeriesRepository

_RESOURCE = "Favorite Series"

_default_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetFavoriteSeriesPayload:
    user_id: str
    page: int
    page_size: int


@dataclass(frozen=True)
class GetFavoriteSeriesResult:
    data: list[FavoriteSeries]
    total: int


class AddFavoriteSeriesAction:
    def __init__(
        self,
        *,
        repository: FavoriteSeriesRepository,
        logger: logging.Logger | None = None,
    ) -> None:
        self._repo = repository
        self._logger = logger or _default_logger

    async def execute(self, user_id: str, series_tmdb_id: int) -> FavoriteSeries:
        existing = await self._repo.find_one(user_id, series_tmdb_id)
        if existing is not None:
            raise ResourceAlreadyExistsError(
                _RESOURCE,
                "Series is already in favorites",
                user_id=user_id,
                series_tmdb_id=series_tmdb_id,
            )

        favorite = await self._repo.create(user_id=user_id, series_tmdb_id=series_tmdb_id)

        self._logger.info(
            "favorite_series_added",
            extra={"user_id": user_id, "series_tmdb_id": series_tmdb_id},
        )
        return favorite


class GetFavoriteSeriesAction:
    def __init__(self, *, repository: FavoriteSeriesRepository) -> None:
        self._repo = repository

    async def execute(self, payload: GetFavoriteSeriesPayload) -> GetFavoriteSeriesResult:
        # page bounds are left to the repository
        favorites, total = await asyncio.gather(
            self._repo.find_many(payload.user_id, payload.page, payload.page_size),
            self._repo.count(payload.user_id),
        )
        return GetFavoriteSeriesResult(data=list(favorites), total=int(total))


class RemoveFavoriteSeriesAction:
    def __init__(
        self,
        *,
        repository: FavoriteSeriesRepository,
        logger: logging.Logger | None = None,
    ) -> None:
        self._repo = repository
        self._logger = logger or _default_logger

    async def execute(self, user_id: str, series_tmdb_id: int) -> None:
        existing = await self._repo.find_one(user_id, series_tmdb_id)
        if existing is None:
            raise ResourceNotFoundError(
                _RESOURCE,
                "Series not found in favorites",
                user_id=user_id,
                series_tmdb_id=series_tmdb_id,
            )

        await self._repo.delete(user_id, series_tmdb_id)

        self._logger.info(
            "favorite_series_removed",
            extra={"user_id": user_id, "series_tmdb_id": series_tmdb_id},
        )

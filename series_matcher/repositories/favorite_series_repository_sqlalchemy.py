from __future__ import annotations

import asyncio

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from series_matcher.domain.entities import FavoriteSeries
from series_matcher.domain.ports.favorite_series_repository import FavoriteSeriesRepository
from series_matcher.infrastructure.db.models import UserFavoriteSeries


def _to_entity(row: UserFavoriteSeries) -> FavoriteSeries:
    return FavoriteSeries(
        id=row.id,
        user_id=row.user_id,
        series_tmdb_id=row.series_tmdb_id,
        added_at=row.added_at,
    )


class SqlAlchemyFavoriteSeriesRepository(FavoriteSeriesRepository):
    """Each call runs in its own session so concurrent reads never share one."""

    def __init__(self, *, sessionmaker: async_sessionmaker[AsyncSession], timeout_seconds: float) -> None:
        self._sessionmaker = sessionmaker
        self._timeout_seconds = float(timeout_seconds)

    async def find_one(self, user_id: str, series_tmdb_id: int) -> FavoriteSeries | None:
        stmt = (
            select(UserFavoriteSeries)
            .where(
                UserFavoriteSeries.user_id == user_id,
                UserFavoriteSeries.series_tmdb_id == series_tmdb_id,
            )
            .limit(1)
        )
        async with self._sessionmaker() as session:
            result = await asyncio.wait_for(session.execute(stmt), timeout=self._timeout_seconds)
            row = result.scalar_one_or_none()
        return _to_entity(row) if row is not None else None

    async def create(self, *, user_id: str, series_tmdb_id: int) -> FavoriteSeries:
        row = UserFavoriteSeries(user_id=user_id, series_tmdb_id=series_tmdb_id)
        async with self._sessionmaker() as session:
            session.add(row)
            await asyncio.wait_for(session.commit(), timeout=self._timeout_seconds)
        return _to_entity(row)

    async def find_many(self, user_id: str, page: int, page_size: int) -> list[FavoriteSeries]:
        stmt = (
            select(UserFavoriteSeries)
            .where(UserFavoriteSeries.user_id == user_id)
            .order_by(UserFavoriteSeries.added_at.desc(), UserFavoriteSeries.id.desc())
            .limit(page_size)
            .offset((page - 1) * page_size)
        )
        async with self._sessionmaker() as session:
            result = await asyncio.wait_for(session.execute(stmt), timeout=self._timeout_seconds)
            rows = result.scalars().all()
        return [_to_entity(r) for r in rows]

    async def count(self, user_id: str) -> int:
        stmt = select(func.count()).select_from(UserFavoriteSeries).where(UserFavoriteSeries.user_id == user_id)
        async with self._sessionmaker() as session:
            result = await asyncio.wait_for(session.execute(stmt), timeout=self._timeout_seconds)
            total = result.scalar_one()
        return int(total or 0)

    async def delete(self, user_id: str, series_tmdb_id: int) -> None:
        stmt = delete(UserFavoriteSeries).where(
            UserFavoriteSeries.user_id == user_id,
            UserFavoriteSeries.series_tmdb_id == series_tmdb_id,
        )
        async with self._sessionmaker() as session:
            await asyncio.wait_for(session.execute(stmt), timeout=self._timeout_seconds)
            await asyncio.wait_for(session.commit(), timeout=self._timeout_seconds)

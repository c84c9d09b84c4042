from __future__ import annotations

import asyncio

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from series_matcher.domain.entities import IgnoredSeries
from series_matcher.domain.ports.ignored_series_repository import IgnoredSeriesRepository
from series_matcher.infrastructure.db.models import UserIgnoredSeries


def _to_entity(row: UserIgnoredSeries) -> IgnoredSeries:
    return IgnoredSeries(
        id=row.id,
        user_id=row.user_id,
        series_tmdb_id=row.series_tmdb_id,
        ignored_at=row.ignored_at,
    )


class SqlAlchemyIgnoredSeriesRepository(IgnoredSeriesRepository):
    def __init__(self, *, sessionmaker: async_sessionmaker[AsyncSession], timeout_seconds: float) -> None:
        self._sessionmaker = sessionmaker
        self._timeout_seconds = float(timeout_seconds)

    async def find_one(self, user_id: str, series_tmdb_id: int) -> IgnoredSeries | None:
        stmt = (
            select(UserIgnoredSeries)
            .where(
                UserIgnoredSeries.user_id == user_id,
                UserIgnoredSeries.series_tmdb_id == series_tmdb_id,
            )
            .limit(1)
        )
        async with self._sessionmaker() as session:
            result = await asyncio.wait_for(session.execute(stmt), timeout=self._timeout_seconds)
            row = result.scalar_one_or_none()
        return _to_entity(row) if row is not None else None

    async def create(self, *, user_id: str, series_tmdb_id: int) -> IgnoredSeries:
        row = UserIgnoredSeries(user_id=user_id, series_tmdb_id=series_tmdb_id)
        async with self._sessionmaker() as session:
            session.add(row)
            await asyncio.wait_for(session.commit(), timeout=self._timeout_seconds)
        return _to_entity(row)

    async def find_many(self, user_id: str, page: int, page_size: int) -> list[IgnoredSeries]:
        stmt = (
            select(UserIgnoredSeries)
            .where(UserIgnoredSeries.user_id == user_id)
            .order_by(UserIgnoredSeries.ignored_at.desc(), UserIgnoredSeries.id.desc())
            .limit(page_size)
            .offset((page - 1) * page_size)
        )
        async with self._sessionmaker() as session:
            result = await asyncio.wait_for(session.execute(stmt), timeout=self._timeout_seconds)
            rows = result.scalars().all()
        return [_to_entity(r) for r in rows]

    async def count(self, user_id: str) -> int:
        stmt = select(func.count()).select_from(UserIgnoredSeries).where(UserIgnoredSeries.user_id == user_id)
        async with self._sessionmaker() as session:
            result = await asyncio.wait_for(session.execute(stmt), timeout=self._timeout_seconds)
            total = result.scalar_one()
        return int(total or 0)

    async def delete(self, user_id: str, series_tmdb_id: int) -> None:
        stmt = delete(UserIgnoredSeries).where(
            UserIgnoredSeries.user_id == user_id,
            UserIgnoredSeries.series_tmdb_id == series_tmdb_id,
        )
        async with self._sessionmaker() as session:
            await asyncio.wait_for(session.execute(stmt), timeout=self._timeout_seconds)
            await asyncio.wait_for(session.commit(), timeout=self._timeout_seconds)

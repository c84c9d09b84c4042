from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from series_matcher.core.config import Settings, get_settings
from series_matcher.domain.ports.favorite_series_repository import FavoriteSeriesRepository
from series_matcher.domain.ports.ignored_series_repository import IgnoredSeriesRepository
from series_matcher.repositories.favorite_series_repository_sqlalchemy import SqlAlchemyFavoriteSeriesRepository
from series_matcher.repositories.ignored_series_repository_sqlalchemy import SqlAlchemyIgnoredSeriesRepository
from series_matcher.services.favorite_series_actions import (
    AddFavoriteSeriesAction,
    GetFavoriteSeriesAction,
    RemoveFavoriteSeriesAction,
)
from series_matcher.services.ignored_series_actions import (
    AddIgnoredSeriesAction,
    GetUserIgnoredSeriesAction,
    RemoveIgnoredSeriesAction,
)


def settings_dep() -> Settings:
    return get_settings()


def sessionmaker_dep(request: Request) -> async_sessionmaker[AsyncSession]:
    sm: async_sessionmaker[AsyncSession] | None = getattr(request.app.state, "sessionmaker", None)
    if sm is None:
        raise RuntimeError("DB sessionmaker is not initialized")
    return sm


def favorite_series_repository_dep(
    sessionmaker: async_sessionmaker[AsyncSession] = Depends(sessionmaker_dep),
    settings: Settings = Depends(settings_dep),
) -> FavoriteSeriesRepository:
    return SqlAlchemyFavoriteSeriesRepository(
        sessionmaker=sessionmaker,
        timeout_seconds=settings.repository_timeout_seconds,
    )


def ignored_series_repository_dep(
    sessionmaker: async_sessionmaker[AsyncSession] = Depends(sessionmaker_dep),
    settings: Settings = Depends(settings_dep),
) -> IgnoredSeriesRepository:
    return SqlAlchemyIgnoredSeriesRepository(
        sessionmaker=sessionmaker,
        timeout_seconds=settings.repository_timeout_seconds,
    )


def add_favorite_series_action_dep(
    repo: FavoriteSeriesRepository = Depends(favorite_series_repository_dep),
) -> AddFavoriteSeriesAction:
    return AddFavoriteSeriesAction(repository=repo)


def get_favorite_series_action_dep(
    repo: FavoriteSeriesRepository = Depends(favorite_series_repository_dep),
) -> GetFavoriteSeriesAction:
    return GetFavoriteSeriesAction(repository=repo)


def remove_favorite_series_action_dep(
    repo: FavoriteSeriesRepository = Depends(favorite_series_repository_dep),
) -> RemoveFavoriteSeriesAction:
    return RemoveFavoriteSeriesAction(repository=repo)


def add_ignored_series_action_dep(
    repo: IgnoredSeriesRepository = Depends(ignored_series_repository_dep),
) -> AddIgnoredSeriesAction:
    return AddIgnoredSeriesAction(repository=repo)


def get_ignored_series_action_dep(
    repo: IgnoredSeriesRepository = Depends(ignored_series_repository_dep),
) -> GetUserIgnoredSeriesAction:
    return GetUserIgnoredSeriesAction(repository=repo)


def remove_ignored_series_action_dep(
    repo: IgnoredSeriesRepository = Depends(ignored_series_repository_dep),
) -> RemoveIgnoredSeriesAction:
    return RemoveIgnoredSeriesAction(repository=repo)

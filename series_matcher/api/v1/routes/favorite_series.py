from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from series_matcher.api.v1.routes.pagination import PageParams, page_params_dep
from series_matcher.core.deps import (
    add_favorite_series_action_dep,
    get_favorite_series_action_dep,
    remove_favorite_series_action_dep,
)
from series_matcher.domain.entities import FavoriteSeries
from series_matcher.domain.schemas import (
    ERROR_RESPONSES,
    FavoriteSeriesListOut,
    FavoriteSeriesOut,
    PageMetadata,
    SeriesTmdbIdIn,
)
from series_matcher.services.favorite_series_actions import (
    AddFavoriteSeriesAction,
    GetFavoriteSeriesAction,
    GetFavoriteSeriesPayload,
    RemoveFavoriteSeriesAction,
)

router = APIRouter(prefix="/users/{user_id}/series/favorites", responses=ERROR_RESPONSES)

UserId = Annotated[str, Path(min_length=1, max_length=64)]


def _to_out(favorite: FavoriteSeries) -> FavoriteSeriesOut:
    return FavoriteSeriesOut(series_tmdb_id=favorite.series_tmdb_id, added_at=favorite.added_at)


@router.get("", response_model=FavoriteSeriesListOut)
async def list_favorite_series(
    user_id: UserId,
    paging: PageParams = Depends(page_params_dep),
    action: GetFavoriteSeriesAction = Depends(get_favorite_series_action_dep),
) -> FavoriteSeriesListOut:
    result = await action.execute(
        GetFavoriteSeriesPayload(user_id=user_id, page=paging.page, page_size=paging.page_size)
    )
    return FavoriteSeriesListOut(
        data=[_to_out(f) for f in result.data],
        metadata=PageMetadata(page=paging.page, page_size=paging.page_size, total=result.total),
    )


@router.post("", response_model=FavoriteSeriesOut, status_code=status.HTTP_201_CREATED)
async def add_favorite_series(
    body: SeriesTmdbIdIn,
    user_id: UserId,
    action: AddFavoriteSeriesAction = Depends(add_favorite_series_action_dep),
) -> FavoriteSeriesOut:
    favorite = await action.execute(user_id, body.series_tmdb_id)
    return _to_out(favorite)


@router.delete("/{series_tmdb_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_favorite_series(
    user_id: UserId,
    series_tmdb_id: int = Path(ge=1),
    action: RemoveFavoriteSeriesAction = Depends(remove_favorite_series_action_dep),
) -> Response:
    await action.execute(user_id, series_tmdb_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

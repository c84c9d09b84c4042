from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from series_matcher.api.v1.routes.pagination import PageParams, page_params_dep
from series_matcher.core.deps import (
    add_ignored_series_action_dep,
    get_ignored_series_action_dep,
    remove_ignored_series_action_dep,
)
from series_matcher.domain.entities import IgnoredSeries
from series_matcher.domain.schemas import (
    ERROR_RESPONSES,
    IgnoredSeriesListOut,
    IgnoredSeriesOut,
    PageMetadata,
    SeriesTmdbIdIn,
)
from series_matcher.services.ignored_series_actions import (
    AddIgnoredSeriesAction,
    GetUserIgnoredSeriesAction,
    GetUserIgnoredSeriesPayload,
    RemoveIgnoredSeriesAction,
)

router = APIRouter(prefix="/users/{user_id}/series/ignored", responses=ERROR_RESPONSES)

UserId = Annotated[str, Path(min_length=1, max_length=64)]


def _to_out(ignored: IgnoredSeries) -> IgnoredSeriesOut:
    return IgnoredSeriesOut(series_tmdb_id=ignored.series_tmdb_id, ignored_at=ignored.ignored_at)


@router.get("", response_model=IgnoredSeriesListOut)
async def list_ignored_series(
    user_id: UserId,
    paging: PageParams = Depends(page_params_dep),
    action: GetUserIgnoredSeriesAction = Depends(get_ignored_series_action_dep),
) -> IgnoredSeriesListOut:
    result = await action.execute(
        GetUserIgnoredSeriesPayload(user_id=user_id, page=paging.page, page_size=paging.page_size)
    )
    return IgnoredSeriesListOut(
        data=[_to_out(i) for i in result.data],
        metadata=PageMetadata(page=paging.page, page_size=paging.page_size, total=result.total),
    )


@router.post("", response_model=IgnoredSeriesOut, status_code=status.HTTP_201_CREATED)
async def add_ignored_series(
    body: SeriesTmdbIdIn,
    user_id: UserId,
    action: AddIgnoredSeriesAction = Depends(add_ignored_series_action_dep),
) -> IgnoredSeriesOut:
    ignored = await action.execute(user_id, body.series_tmdb_id)
    return _to_out(ignored)


@router.delete("/{series_tmdb_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_ignored_series(
    user_id: UserId,
    series_tmdb_id: int = Path(ge=1),
    action: RemoveIgnoredSeriesAction = Depends(remove_ignored_series_action_dep),
) -> Response:
    await action.execute(user_id, series_tmdb_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

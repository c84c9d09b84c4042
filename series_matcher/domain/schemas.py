from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class SeriesTmdbIdIn(BaseModel):
    series_tmdb_id: int = Field(ge=1)


class FavoriteSeriesOut(BaseModel):
    series_tmdb_id: int
    added_at: datetime


class IgnoredSeriesOut(BaseModel):
    series_tmdb_id: int
    ignored_at: datetime


class PageMetadata(BaseModel):
    page: int
    page_size: int
    total: int


class FavoriteSeriesListOut(BaseModel):
    data: list[FavoriteSeriesOut]
    metadata: PageMetadata


class IgnoredSeriesListOut(BaseModel):
    data: list[IgnoredSeriesOut]
    metadata: PageMetadata


class ErrorDetail(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorDetail
    request_id: str


ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    404: {"model": ErrorResponse, "description": "Series is not in the list"},
    409: {"model": ErrorResponse, "description": "Series is already in the list"},
    422: {"model": ErrorResponse, "description": "Invalid request"},
    503: {"model": ErrorResponse, "description": "Database unavailable"},
}

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Query

from series_matcher.core.config import Settings
from series_matcher.core.deps import settings_dep
from series_matcher.core.errors import RequestInvalidError

MAX_PAGE = 500


@dataclass(frozen=True)
class PageParams:
    page: int
    page_size: int


def page_params_dep(
    page: int = Query(default=1, ge=1, le=MAX_PAGE),
    page_size: int | None = Query(default=None, ge=1),
    settings: Settings = Depends(settings_dep),
) -> PageParams:
    size = page_size if page_size is not None else settings.default_page_size
    if size > settings.max_page_size:
        raise RequestInvalidError(f"page_size {size} exceeds {settings.max_page_size}")
    return PageParams(page=page, page_size=size)

from __future__ import annotations

from fastapi import APIRouter

from series_matcher.api.v1.routes.favorite_series import router as favorite_series_router
from series_matcher.api.v1.routes.health import router as health_router
from series_matcher.api.v1.routes.ignored_series import router as ignored_series_router

router = APIRouter()
router.include_router(health_router, tags=["health"])
router.include_router(favorite_series_router, tags=["favorite-series"])
router.include_router(ignored_series_router, tags=["ignored-series"])

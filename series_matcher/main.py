from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from series_matcher.api.v1.router import router as v1_router
from series_matcher.core.config import Settings, get_settings
from series_matcher.core.exception_handlers import register_exception_handlers
from series_matcher.core.logging import setup_logging
from series_matcher.core.middleware.access_log import AccessLogMiddleware
from series_matcher.core.middleware.request_id import RequestIdMiddleware
from series_matcher.core.middleware.security_headers import SecurityHeadersMiddleware
from series_matcher.infrastructure.db.session import build_async_engine, build_sessionmaker

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    docs_url = "/docs" if settings.docs_enabled else None
    redoc_url = "/redoc" if settings.docs_enabled else None
    openapi_url = "/openapi.json" if settings.docs_enabled else None

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        await _startup(app, settings)
        try:
            yield
        finally:
            await _shutdown(app)

    app = FastAPI(
        title=settings.app_name,
        docs_url=docs_url,
        redoc_url=redoc_url,
        openapi_url=openapi_url,
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        allow_credentials=settings.cors_allow_credentials,
    )

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIdMiddleware)

    app.include_router(v1_router, prefix=settings.api_v1_prefix)

    return app


async def _startup(app: FastAPI, settings: Settings) -> None:
    # Tests may pre-install their own sessionmaker.
    if getattr(app.state, "sessionmaker", None) is not None:
        return

    engine: AsyncEngine = build_async_engine(settings)
    sessionmaker: async_sessionmaker[AsyncSession] = build_sessionmaker(engine)

    app.state.engine = engine
    app.state.sessionmaker = sessionmaker

    logger.info("startup_complete", extra={"app_env": settings.app_env})


async def _shutdown(app: FastAPI) -> None:
    engine: AsyncEngine | None = getattr(app.state, "engine", None)
    if engine is None:
        return
    try:
        await engine.dispose()
    except Exception:  # noqa: BLE001
        logger.warning("engine_dispose_failed", exc_info=True)


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "series_matcher.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()

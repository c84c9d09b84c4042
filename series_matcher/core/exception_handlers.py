from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from series_matcher.core.errors import (
    AppError,
    InternalError,
    RequestInvalidError,
    ResourceAlreadyExistsError,
    ServiceUnavailableError,
    public_message,
)

logger = logging.getLogger(__name__)

# constraint name -> (table, resource, reason)
_DUPLICATE_SERIES_CONSTRAINTS: dict[str, tuple[str, str, str]] = {
    "uq_user_favorite_series_user_series": (
        "user_favorite_series",
        "Favorite Series",
        "Series is already in favorites",
    ),
    "uq_user_ignored_series_user_series": (
        "user_ignored_series",
        "Ignored Series",
        "Series is already in ignored list",
    ),
}


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "-") or "-"


def _error_envelope(*, code: str, message: str, request_id: str) -> dict[str, Any]:
    return {"error": {"code": code, "message": message}, "request_id": request_id}


def duplicate_series_error(exc: IntegrityError) -> ResourceAlreadyExistsError | None:
    """Return the 409 error for a unique (user, series) violation, or None for any other integrity failure."""

    message = str(exc.orig)
    for constraint, (table, resource, reason) in _DUPLICATE_SERIES_CONSTRAINTS.items():
        # Postgres reports the constraint name, SQLite reports the table's columns.
        if constraint in message or f"UNIQUE constraint failed: {table}." in message:
            return ResourceAlreadyExistsError(resource, reason)
    return None


def _app_error_response(request: Request, exc: AppError, *, cause: BaseException | None = None) -> JSONResponse:
    rid = _request_id(request)
    payload = _error_envelope(code=exc.code, message=exc.public_message, request_id=rid)

    log_extra: dict[str, Any] = {"code": exc.code, "request_id": rid, "detail": str(exc)}
    if exc.extra and "context" in exc.extra:
        log_extra["error_context"] = exc.extra["context"]

    if exc.http_status >= 500:
        logger.warning("app_error", extra=log_extra, exc_info=cause or exc.__cause__ or exc)
    else:
        logger.info("app_error", extra=log_extra)

    return JSONResponse(status_code=exc.http_status, content=payload)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return _app_error_response(request, exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        rid = _request_id(request)

        if exc.status_code == 404:
            code = "not_found"
        elif exc.status_code == 405:
            code = "method_not_allowed"
        else:
            code = "request_invalid"

        logger.info("http_exception", extra={"code": code, "status": exc.status_code, "request_id": rid})
        payload = _error_envelope(code=code, message=public_message(code), request_id=rid)
        return JSONResponse(status_code=exc.status_code, content=payload)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _app_error_response(request, RequestInvalidError(f"{len(exc.errors())} validation error(s)"))

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        logger.info("integrity_error", extra={"request_id": _request_id(request), "detail": str(exc.orig)})
        duplicate = duplicate_series_error(exc)
        if duplicate is None:
            return _app_error_response(request, InternalError("integrity error"), cause=exc)
        # a concurrent insert won the race past the existence check
        return _app_error_response(request, duplicate)

    @app.exception_handler(DBAPIError)
    async def database_error_handler(request: Request, exc: DBAPIError) -> JSONResponse:
        return _app_error_response(request, ServiceUnavailableError("database error"), cause=exc)

    @app.exception_handler(TimeoutError)
    async def timeout_error_handler(request: Request, exc: TimeoutError) -> JSONResponse:
        return _app_error_response(request, ServiceUnavailableError("repository timeout"), cause=exc)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # noqa: ARG001
        rid = _request_id(request)
        logger.exception("unhandled_exception", extra={"request_id": rid})
        safe = InternalError()
        payload = _error_envelope(code=safe.code, message=safe.public_message, request_id=rid)
        return JSONResponse(status_code=safe.http_status, content=payload)

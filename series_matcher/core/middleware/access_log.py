from __future__ import annotations

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from series_matcher.core.config import get_settings
from series_matcher.core.context import client_ip_ctx_var
from series_matcher.core.security import get_client_ip

logger = logging.getLogger(__name__)


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        settings = get_settings()
        client_ip_ctx_var.set(get_client_ip(request, trusted_proxy_headers=settings.trusted_proxy_headers))

        start = time.monotonic()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = int((time.monotonic() - start) * 1000)
            path = request.url.path
            log = logger.debug if path.endswith("/healthz") else logger.info
            log(
                "http_request",
                extra={
                    "http_method": request.method,
                    "http_path": path,
                    "http_status": status_code,
                    "duration_ms": duration_ms,
                },
            )

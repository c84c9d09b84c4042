from __future__ import annotations

from dataclasses import dataclass
from typing import Any


# Not frozen: contextlib assigns __traceback__ on exceptions leaving a generator context manager.
@dataclass(eq=False)
class AppError(Exception):
    code: str
    http_status: int
    log_detail: str | None = None
    extra: dict[str, Any] | None = None

    def __str__(self) -> str:
        return self.log_detail or self.code

    @property
    def public_message(self) -> str:
        return _PUBLIC_MESSAGES.get(self.code, "Request failed.")


class _ResourceError(AppError):
    """Error about a named resource, keyed by the identifiers that located it.

    Context values are stored as strings so they can be logged and compared
    without caring about the caller's types.
    """

    def __init__(
        self,
        *,
        code: str,
        http_status: int,
        resource: str,
        reason: str | None = None,
        **context: Any,
    ) -> None:
        extra: dict[str, Any] = {
            "resource": resource,
            "reason": reason,
            "context": {k: str(v) for k, v in context.items()},
        }
        detail = f"{resource}: {reason}" if reason else resource
        super().__init__(code=code, http_status=http_status, log_detail=detail, extra=extra)

    @property
    def resource(self) -> str:
        return str((self.extra or {}).get("resource", ""))

    @property
    def reason(self) -> str | None:
        return (self.extra or {}).get("reason")

    @property
    def context(self) -> dict[str, str]:
        return dict((self.extra or {}).get("context") or {})

    @property
    def public_message(self) -> str:
        return self.reason or super().public_message


class ResourceAlreadyExistsError(_ResourceError):
    def __init__(self, resource: str, reason: str | None = None, **context: Any) -> None:
        super().__init__(
            code="resource_already_exists",
            http_status=409,
            resource=resource,
            reason=reason,
            **context,
        )


class ResourceNotFoundError(_ResourceError):
    def __init__(self, resource: str, reason: str | None = None, **context: Any) -> None:
        super().__init__(
            code="resource_not_found",
            http_status=404,
            resource=resource,
            reason=reason,
            **context,
        )


class RequestInvalidError(AppError):
    def __init__(self, log_detail: str | None = None) -> None:
        super().__init__(code="request_invalid", http_status=422, log_detail=log_detail)


class ServiceUnavailableError(AppError):
    def __init__(self, log_detail: str | None = None) -> None:
        super().__init__(code="service_unavailable", http_status=503, log_detail=log_detail)


class InternalError(AppError):
    def __init__(self, log_detail: str | None = None) -> None:
        super().__init__(code="internal_error", http_status=500, log_detail=log_detail)


_PUBLIC_MESSAGES: dict[str, str] = {
    "resource_already_exists": "Resource already exists.",
    "resource_not_found": "Resource not found.",
    "request_invalid": "Invalid request.",
    "not_found": "Not found.",
    "method_not_allowed": "Method not allowed.",
    "service_unavailable": "Service temporarily unavailable. Try again later.",
    "internal_error": "Internal server error.",
}


def public_message(code: str) -> str:
    return _PUBLIC_MESSAGES.get(code, "Request failed.")

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


LOG = logging.getLogger(__name__)


class ServiceError(Exception):
    """Request-level error mapped to an HTTP status at the handler boundary."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "Internal Server Error"

    def __init__(self, detail: str | None = None) -> None:
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class ValidationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "invalid request"


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "not found"


class StorageError(ServiceError):
    # detail is fixed: the cause is logged, never sent to the client
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "database error"

    def __init__(self) -> None:
        super().__init__()


class FatalStartupError(RuntimeError):
    """The connection pool never became ready within the retry budget."""


def _describe_validation(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", "invalid")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or ValidationError.detail


def install_error_handlers(app: FastAPI) -> None:
    """Map typed service errors and malformed requests to JSON responses."""

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):  # type: ignore[override]
        if exc.status_code >= 500:
            LOG.error("request failed path=%s status=%s", request.url.path, exc.status_code)
        return JSONResponse({"detail": exc.detail}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):  # type: ignore[override]
        detail = _describe_validation(exc)
        LOG.info("rejected request path=%s err=%s", request.url.path, detail)
        return JSONResponse({"detail": detail}, status_code=ValidationError.status_code)

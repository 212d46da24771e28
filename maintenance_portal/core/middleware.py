# maintenance_portal/core/middleware.py
"""
Core middleware and exception handler registration for the FastAPI
application.

This module provides request tracking, timing, error logging and the
translation of application exceptions into JSON error responses.
"""
from __future__ import annotations

import time
import uuid
from typing import Any, Callable, Dict, List, Optional

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from maintenance_portal.core.exceptions import BaseAppException, ErrorCode
from maintenance_portal.core.logging import get_logger, request_id as request_id_var, user_id as user_id_var

logger = get_logger(__name__)
access_log = structlog.get_logger("maintenance_portal.access")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds a unique request ID to each incoming request.

    The request ID is:
    - Stored in request.state.request_id
    - Bound to the logging context for the duration of the request
    - Added to response headers as X-Request-ID
    """

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Reuse an upstream request ID when a proxy already assigned one
        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = request_id

        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
            user_id_var.set(None)

        response.headers[self.header_name] = request_id
        return response


class TimingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that measures and logs request processing time.

    Adds X-Process-Time header to responses with the processing duration in seconds.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        process_time = time.perf_counter() - start_time

        response.headers["X-Process-Time"] = f"{process_time:.4f}"

        access_log.info(
            "request_completed",
            request_id=getattr(request.state, "request_id", None),
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            process_time=round(process_time, 4),
            client_host=request.client.host if request.client else None,
        )
        return response


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that logs unhandled exceptions during request processing.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                f"Request processing failed: {str(exc)}",
                extra={
                    "method": request.method,
                    "url": str(request.url.path),
                    "error_type": type(exc).__name__,
                },
                exc_info=True,
            )
            raise


def register_middlewares(app: FastAPI) -> None:
    """
    Register all core middlewares to the FastAPI application.

    Middlewares run in reverse order of registration, so the request ID is
    assigned before timing and error logging see the request.
    """
    app.add_middleware(ErrorLoggingMiddleware)
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    logger.debug(
        "Core middlewares registered",
        extra={"middlewares": ["RequestIDMiddleware", "TimingMiddleware", "ErrorLoggingMiddleware"]},
    )


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

def format_validation_errors(errors: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Format request validation errors into a structured response body"""
    field_errors: Dict[str, List[str]] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field_path = ".".join(loc) or "request"
        field_errors.setdefault(field_path, []).append(error.get("msg", "Invalid value"))
    return {"field_errors": field_errors, "error_count": len(errors)}


def _with_request_id(body: Dict[str, Any], request: Request) -> Dict[str, Any]:
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        body["request_id"] = request_id
    return body


async def app_exception_handler(request: Request, exc: BaseAppException) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"Application exception: {exc.error_code.value} - {exc.message}",
        extra={"path": request.url.path, "method": request.method, "status_code": exc.status_code},
    )
    return JSONResponse(status_code=exc.status_code, content=_with_request_id(exc.to_dict(), request))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = format_validation_errors(exc.errors())
    logger.warning(
        f"Validation error: {details['error_count']} field(s) failed validation",
        extra={"path": request.url.path, "method": request.method},
    )
    body = {
        "error": {
            "message": "Request validation failed",
            "code": ErrorCode.VALIDATION_ERROR.value,
            "details": details,
            "type": "ValidationError",
        }
    }
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_with_request_id(body, request),
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        f"Database error: {type(exc).__name__}",
        extra={"path": request.url.path, "method": request.method},
        exc_info=exc,
    )
    body = {
        "error": {
            "message": "The data store is unavailable",
            "code": ErrorCode.UPSTREAM_ERROR.value,
            "details": {"service": "database"},
            "type": "UpstreamError",
        }
    }
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content=_with_request_id(body, request))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach JSON error rendering for application, validation and database errors."""
    app.add_exception_handler(BaseAppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)


def get_request_id(request: Request) -> Optional[str]:
    """Return the request ID assigned to the current request, if any."""
    return getattr(request.state, "request_id", None)


__all__ = [
    "RequestIDMiddleware",
    "TimingMiddleware",
    "ErrorLoggingMiddleware",
    "register_middlewares",
    "register_exception_handlers",
    "format_validation_errors",
    "get_request_id",
]

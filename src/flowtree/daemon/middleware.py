"""HTTP middleware for request correlation and access logging."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from flowtree.config.constants import REQUEST_ID_HEADER
from flowtree.core.errors import InternalError
from flowtree.core.logging import clear_request_id, set_request_id

logger = structlog.get_logger()

# Type alias for the call_next function
CallNext = Callable[[Request], Awaitable[Response]]


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with a correlation ID and log its outcome.

    An incoming ``X-Request-ID`` header is reused; otherwise a new ID is
    generated. The ID is echoed back on the response.
    """

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        """Assign the request ID, time the request and log it."""
        request_id = set_request_id(request.headers.get(REQUEST_ID_HEADER))
        started = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            logger.info(
                "request",
                method=request.method,
                path=request.url.path,
                status=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            return response
        finally:
            clear_request_id()


class RecoveryMiddleware(BaseHTTPMiddleware):
    """Turn unexpected exceptions into a 500 JSON response instead of a dropped connection."""

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        """Dispatch, answering with INTERNAL_ERROR if anything escapes."""
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception("request_failed", method=request.method, path=request.url.path)
            error = InternalError.unexpected(type(exc).__name__)
            return JSONResponse(error.to_dict(), status_code=error.http_status)

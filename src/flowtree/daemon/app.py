"""Starlette application factory."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from flowtree.config.constants import REQUEST_ID_HEADER, WARNINGS_HEADER
from flowtree.core.errors import FlowTreeError
from flowtree.daemon.middleware import RecoveryMiddleware, RequestLoggingMiddleware
from flowtree.daemon.routes import create_routes

if TYPE_CHECKING:
    from flowtree.config.models import FlowTreeConfig

logger = structlog.get_logger()


async def _flowtree_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Map a FlowTreeError to its HTTP status with the error dict as body."""
    assert isinstance(exc, FlowTreeError)
    logger.info(
        "request_rejected",
        path=request.url.path,
        error=exc.error_name,
        message=exc.message,
    )
    return JSONResponse(exc.to_dict(), status_code=exc.http_status)


def create_app(config: FlowTreeConfig) -> Starlette:
    """Create the Starlette application for the given configuration."""
    cors = config.cors
    middleware = [
        # Outermost first
        Middleware(RequestLoggingMiddleware),
        Middleware(
            CORSMiddleware,
            allow_origins=cors.origins,
            allow_methods=cors.allow_methods,
            allow_headers=cors.allow_headers,
            expose_headers=[WARNINGS_HEADER, REQUEST_ID_HEADER],
        ),
        Middleware(RecoveryMiddleware),
    ]

    return Starlette(
        routes=create_routes(config.limits),
        middleware=middleware,
        exception_handlers={FlowTreeError: _flowtree_error_handler},
    )

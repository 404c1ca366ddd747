"""HTTP routes for the FlowTree service."""

from __future__ import annotations

import importlib.metadata
import time
from typing import TYPE_CHECKING

from starlette.concurrency import run_in_threadpool
from starlette.requests import ClientDisconnect, Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from flowtree.config.constants import WARNINGS_HEADER
from flowtree.core.errors import RequestError
from flowtree.parsing.packs import PACKS, supported_languages
from flowtree.parsing.treesitter import resolve_pack
from flowtree.tree.transform import transform

if TYPE_CHECKING:
    from flowtree.config.models import LimitsConfig


def _get_version() -> str:
    """Get package version from installed metadata."""
    try:
        return importlib.metadata.version("flowtree")
    except importlib.metadata.PackageNotFoundError:
        return "dev"


async def _read_source(request: Request, limit: int) -> bytes:
    """Read the request body, refusing anything larger than ``limit`` bytes."""
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise RequestError.source_too_large(int(declared), limit)

    chunks: list[bytes] = []
    size = 0
    try:
        async for chunk in request.stream():
            size += len(chunk)
            if size > limit:
                raise RequestError.source_too_large(size, limit)
            chunks.append(chunk)
    except ClientDisconnect as e:
        raise RequestError.unreadable_input("client disconnected") from e
    return b"".join(chunks)


def create_routes(limits: LimitsConfig) -> list[Route]:
    """Create HTTP routes bound to the configured limits."""
    start_time = time.time()
    version = _get_version()

    async def health(request: Request) -> JSONResponse:
        """Health check endpoint, suitable for liveness probes."""
        _ = request  # unused
        return JSONResponse(
            {
                "status": "healthy",
                "version": version,
                "uptime_seconds": round(time.time() - start_time, 1),
            }
        )

    async def languages(request: Request) -> JSONResponse:
        """Supported language selectors and their file extensions."""
        _ = request  # unused
        return JSONResponse(
            {
                "languages": [
                    {"name": name, "extensions": sorted(PACKS[name].extensions)}
                    for name in supported_languages()
                ]
            }
        )

    async def generate_tree(request: Request) -> JSONResponse:
        """Build the control-structure tree of the source in the body.

        Path params:
            language: c, cpp, python or javascript

        Query params:
            envelope: "true" to wrap the result with warnings and parse stats
        """
        language = request.path_params["language"]
        # Reject before touching the body
        resolve_pack(language)

        source = await _read_source(request, limits.max_source_bytes)
        result = await run_in_threadpool(transform, language, source)

        headers = {WARNINGS_HEADER: str(len(result.warnings))}
        if request.query_params.get("envelope", "").lower() in ("1", "true", "yes"):
            return JSONResponse(result.to_dict(), headers=headers)
        return JSONResponse(result.to_wire(), headers=headers)

    return [
        Route("/health", health, methods=["GET"]),
        Route("/languages", languages, methods=["GET"]),
        Route("/tree/{language}", generate_tree, methods=["POST"]),
    ]

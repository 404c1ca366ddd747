"""Service lifecycle management."""

from __future__ import annotations

import asyncio
import signal
from typing import TYPE_CHECKING

import structlog
import uvicorn

from flowtree.daemon.app import create_app

if TYPE_CHECKING:
    from flowtree.config.models import FlowTreeConfig

logger = structlog.get_logger()


def build_server(config: FlowTreeConfig) -> uvicorn.Server:
    """Create the uvicorn server for the configured app and bind address."""
    app = create_app(config)
    uvicorn_config = uvicorn.Config(
        app,
        host=config.server.host,
        port=config.server.port,
        log_level="warning",  # Use structlog instead
        log_config=None,
        ws="none",
    )
    return uvicorn.Server(uvicorn_config)


async def run_server(config: FlowTreeConfig) -> None:
    """Run the service until a shutdown signal arrives."""
    server = build_server(config)

    # Setup signal handlers with force exit on second signal
    loop = asyncio.get_running_loop()
    shutdown_count = 0
    force_exit_task: asyncio.Task[None] | None = None

    async def force_exit_after_timeout() -> None:
        """Force exit if graceful shutdown takes too long."""
        await asyncio.sleep(config.server.shutdown_timeout_sec)
        logger.info("forcing_exit_after_timeout")
        server.force_exit = True

    def signal_handler() -> None:
        nonlocal shutdown_count, force_exit_task
        shutdown_count += 1
        logger.info("shutdown_signal_received", count=shutdown_count)
        server.should_exit = True
        if shutdown_count == 1:
            force_exit_task = loop.create_task(force_exit_after_timeout())
        else:
            server.force_exit = True
            if force_exit_task:
                force_exit_task.cancel()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, signal_handler)

    base_url = f"http://{config.server.host}:{config.server.port}"
    logger.info("server starting", url=base_url)
    logger.info("endpoint", name="tree", url=f"{base_url}/tree/{{language}}")
    logger.info("endpoint", name="health", url=f"{base_url}/health")

    try:
        await server.serve()
    finally:
        if force_exit_task is not None:
            force_exit_task.cancel()
        logger.info("server stopped")

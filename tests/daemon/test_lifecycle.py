"""Tests for daemon/lifecycle.py module."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import uvicorn

from flowtree.config.models import FlowTreeConfig, ServerConfig
from flowtree.daemon.lifecycle import build_server, run_server


class TestBuildServer:
    """Tests for build_server."""

    def test_binds_configured_address(self) -> None:
        config = FlowTreeConfig(server=ServerConfig(host="127.0.0.1", port=9123))

        server = build_server(config)

        assert isinstance(server, uvicorn.Server)
        assert server.config.host == "127.0.0.1"
        assert server.config.port == 9123

    def test_defaults_to_port_8011(self) -> None:
        server = build_server(FlowTreeConfig())
        assert server.config.port == 8011
        assert server.config.log_config is None


class TestRunServer:
    """Tests for run_server."""

    async def test_serves_until_return(self) -> None:
        with patch.object(uvicorn.Server, "serve", new_callable=AsyncMock) as serve:
            await run_server(FlowTreeConfig())

        serve.assert_awaited_once()

"""Tests for config/models.py module.

Covers:
- LogOutputConfig model
- LoggingConfig model
- ServerConfig model
- CorsConfig model
- LimitsConfig model
- FlowTreeConfig root model
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from flowtree.config.models import (
    CorsConfig,
    FlowTreeConfig,
    LimitsConfig,
    LoggingConfig,
    LogOutputConfig,
    ServerConfig,
)


class TestLogOutputConfig:
    """Tests for LogOutputConfig model."""

    def test_defaults(self) -> None:
        """Default values."""
        config = LogOutputConfig()
        assert config.format == "console"
        assert config.destination == "stderr"
        assert config.level is None

    def test_absolute_path_destination(self) -> None:
        """Absolute path is valid destination."""
        config = LogOutputConfig(destination="/var/log/flowtree.log")
        assert config.destination == "/var/log/flowtree.log"

    def test_relative_path_fails(self) -> None:
        """Relative path is rejected."""
        with pytest.raises(ValidationError):
            LogOutputConfig(destination="logs/flowtree.log")


class TestLoggingConfig:
    """Tests for LoggingConfig model."""

    def test_defaults(self) -> None:
        config = LoggingConfig()
        assert config.level == "INFO"
        assert len(config.outputs) == 1

    def test_invalid_level_fails(self) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig(level="VERBOSE")  # type: ignore[arg-type]


class TestServerConfig:
    """Tests for ServerConfig model."""

    def test_defaults(self) -> None:
        """Listens on every interface, port 8011."""
        config = ServerConfig()
        assert config.host == "0.0.0.0"
        assert config.port == 8011

    @pytest.mark.parametrize("port", [0, 8011, 65535])
    def test_valid_ports(self, port: int) -> None:
        assert ServerConfig(port=port).port == port

    @pytest.mark.parametrize("port", [-1, 65536])
    def test_invalid_ports(self, port: int) -> None:
        with pytest.raises(ValidationError):
            ServerConfig(port=port)


class TestCorsConfig:
    """Tests for CorsConfig model."""

    def test_defaults_allow_any_origin(self) -> None:
        """Default policy accepts any origin and the Authorization header."""
        config = CorsConfig()
        assert config.origins == ["*"]
        assert "Authorization" in config.allow_headers
        assert "POST" in config.allow_methods

    def test_explicit_origins(self) -> None:
        """With allow_all_origins off, only the listed origins are used."""
        config = CorsConfig(allow_all_origins=False, allow_origins=["https://example.com"])
        assert config.origins == ["https://example.com"]


class TestLimitsConfig:
    """Tests for LimitsConfig model."""

    def test_default_is_five_mebibytes(self) -> None:
        assert LimitsConfig().max_source_bytes == 5 * 1024 * 1024

    def test_zero_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LimitsConfig(max_source_bytes=0)


class TestFlowTreeConfig:
    """Tests for the root model."""

    def test_sections_present(self) -> None:
        config = FlowTreeConfig()
        assert isinstance(config.logging, LoggingConfig)
        assert isinstance(config.server, ServerConfig)
        assert isinstance(config.cors, CorsConfig)
        assert isinstance(config.limits, LimitsConfig)

    def test_from_nested_dict(self) -> None:
        config = FlowTreeConfig.model_validate({"server": {"port": 9000}})
        assert config.server.port == 9000
        assert config.server.host == "0.0.0.0"

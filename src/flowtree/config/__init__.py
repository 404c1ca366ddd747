"""Config module exports."""

from flowtree.config.loader import load_config
from flowtree.config.models import (
    CorsConfig,
    FlowTreeConfig,
    LimitsConfig,
    LoggingConfig,
    LogOutputConfig,
    ServerConfig,
)

__all__ = [
    "load_config",
    "CorsConfig",
    "FlowTreeConfig",
    "LimitsConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "ServerConfig",
]

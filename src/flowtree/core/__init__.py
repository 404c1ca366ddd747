"""Core module exports."""

from flowtree.core.errors import (
    ConfigError,
    ErrorCode,
    FlowTreeError,
    InternalError,
    RequestError,
)
from flowtree.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "FlowTreeError",
    "InternalError",
    "RequestError",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "set_request_id",
]

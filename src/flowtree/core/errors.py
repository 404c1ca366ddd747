"""FlowTree error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Tree building (reported as warnings, never raised to callers)
- 4xxx: Request
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Tree (3xxx)
    MISSING_FIELD = 3001

    # Request (4xxx)
    UNSUPPORTED_LANGUAGE = 4001
    UNREADABLE_INPUT = 4002
    SOURCE_TOO_LARGE = 4003

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


# HTTP status used by the service for each raised code
HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.UNSUPPORTED_LANGUAGE: 400,
    ErrorCode.UNREADABLE_INPUT: 400,
    ErrorCode.SOURCE_TOO_LARGE: 413,
}


@dataclass(frozen=True, slots=True)
class FlowTreeError(Exception):
    """Base error with structured context for HTTP and CLI responses."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'UNSUPPORTED_LANGUAGE')."""
        return self.code.name

    @property
    def http_status(self) -> int:
        return HTTP_STATUS.get(self.code, 500)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(FlowTreeError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class RequestError(FlowTreeError):
    """Errors caused by what the caller sent."""

    @classmethod
    def unsupported_language(cls, language: str, supported: list[str]) -> "RequestError":
        return cls(
            code=ErrorCode.UNSUPPORTED_LANGUAGE,
            message=f"language not available: {language}",
            details={"language": language, "supported": supported},
        )

    @classmethod
    def unreadable_input(cls, reason: str) -> "RequestError":
        return cls(
            code=ErrorCode.UNREADABLE_INPUT,
            message=f"couldn't read source code from body: {reason}",
            details={"reason": reason},
        )

    @classmethod
    def source_too_large(cls, size: int, limit: int) -> "RequestError":
        return cls(
            code=ErrorCode.SOURCE_TOO_LARGE,
            message=f"Source is {size} bytes, limit is {limit}",
            details={"size": size, "limit": limit},
        )


class InternalError(FlowTreeError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )

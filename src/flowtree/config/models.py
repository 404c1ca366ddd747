"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (FLOWTREE__SECTION__KEY)
3. Explicit YAML file (--config)
4. Global YAML (~/.config/flowtree/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    FLOWTREE__<SECTION>__<KEY>=<VALUE>

Examples:
    FLOWTREE__LOGGING__LEVEL=DEBUG
    FLOWTREE__SERVER__PORT=8080
    FLOWTREE__LIMITS__MAX_SOURCE_BYTES=1048576
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from flowtree.config.constants import (
    DEFAULT_MAX_SOURCE_BYTES,
    DEFAULT_PORT,
    PORT_MAX,
    PORT_MIN,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        FLOWTREE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG also traces every dropped node type.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ServerConfig(BaseModel):
    """HTTP server configuration.

    Env vars:
        FLOWTREE__SERVER__HOST: Bind address (default: 0.0.0.0)
        FLOWTREE__SERVER__PORT: Port number (default: 8011)
    """

    host: str = Field(
        default="0.0.0.0",
        description="Bind address. Use 127.0.0.1 to accept local clients only.",
    )
    port: int = Field(default=DEFAULT_PORT, description="Server port.")
    shutdown_timeout_sec: float = Field(
        default=3.0,
        description="Force exit this long after the first shutdown signal.",
    )

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not (PORT_MIN <= v <= PORT_MAX):
            raise ValueError(f"Port must be {PORT_MIN}-{PORT_MAX}, got {v}")
        return v


class CorsConfig(BaseModel):
    """Cross-origin policy for browser clients.

    Env vars:
        FLOWTREE__CORS__ALLOW_ALL_ORIGINS: Accept any origin (default: true)
    """

    allow_all_origins: bool = True
    allow_origins: list[str] = Field(
        default_factory=list,
        description="Explicit origins, used only when allow_all_origins is false.",
    )
    allow_methods: list[str] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]
    )
    allow_headers: list[str] = Field(
        default_factory=lambda: ["Origin", "Content-Length", "Content-Type", "Authorization"]
    )

    @property
    def origins(self) -> list[str]:
        return ["*"] if self.allow_all_origins else self.allow_origins


class LimitsConfig(BaseModel):
    """Request size limits.

    Env vars:
        FLOWTREE__LIMITS__MAX_SOURCE_BYTES: Reject larger request bodies
    """

    max_source_bytes: int = Field(
        default=DEFAULT_MAX_SOURCE_BYTES,
        gt=0,
        description="Largest accepted source body in bytes. Larger bodies get 413.",
    )


class FlowTreeConfig(BaseModel):
    """Root configuration model."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    cors: CorsConfig = Field(default_factory=CorsConfig)
    limits: LimitsConfig = Field(default_factory=LimitsConfig)

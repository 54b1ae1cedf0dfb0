"""Pydantic models for the server configuration file."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from example_mcp.protocol.models import ServerInfo
from example_mcp.protocol.transport import DEFAULT_MAX_LINE_BYTES, DEFAULT_SHUTDOWN_GRACE

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings(BaseModel):
    """Where and how much to log.  Output always goes to stderr."""

    level: LogLevel = "INFO"
    format: str = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"

    @field_validator("level", mode="before")
    @classmethod
    def _upper(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


class TransportSettings(BaseModel):
    """Limits applied by the stdio transport."""

    max_line_bytes: int = Field(default=DEFAULT_MAX_LINE_BYTES, gt=0)
    shutdown_grace_seconds: float = Field(default=DEFAULT_SHUTDOWN_GRACE, ge=0)


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    export_to_console: bool = False
    otlp_endpoint: str | None = None


class ServerConfig(BaseModel):
    """Top-level server configuration parsed from YAML."""

    server: ServerInfo = Field(default_factory=ServerInfo)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    transport: TransportSettings = Field(default_factory=TransportSettings)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

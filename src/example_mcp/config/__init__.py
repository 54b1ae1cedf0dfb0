"""Server configuration — models and the YAML loader."""

from example_mcp.config.loader import ConfigError, ConfigLoader
from example_mcp.config.models import (
    LoggingSettings,
    ServerConfig,
    TelemetrySettings,
    TransportSettings,
)

__all__ = [
    "ConfigError",
    "ConfigLoader",
    "LoggingSettings",
    "ServerConfig",
    "TelemetrySettings",
    "TransportSettings",
]

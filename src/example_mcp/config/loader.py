"""Configuration loading for the example MCP server."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from example_mcp.config.models import ServerConfig


class ConfigError(Exception):
    """Raised when a configuration file fails parsing or validation."""


class ConfigLoader:
    """Load and validate a YAML configuration file into a :class:`ServerConfig`."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path

    def load(self) -> ServerConfig:
        """Read YAML, interpolate env vars, and validate.

        Without a path the defaults are returned.  Environment variables in
        the form ``${VAR}`` or ``$VAR`` are expanded using
        :func:`os.path.expandvars` before YAML parsing.

        Raises:
            ConfigError: On read errors, YAML parse errors or schema validation failures.
        """
        if self._path is None:
            return ServerConfig()

        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise ConfigError(f"YAML parse error: {exc}") from exc

        if data is None:
            return ServerConfig()
        if not isinstance(data, dict):
            raise ConfigError("Configuration YAML must be a mapping")

        try:
            return ServerConfig.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc

"""Server settings, loaded from an optional YAML file.

Example ``cassini-mcp.yaml``::

    server:
      name: cassini-mcp-server
    database:
      path: ${CASSINI_DATA}/master_plan.db
    http:
      port: 8080
    logging:
      level: DEBUG
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from cassini_mcp import __version__

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigError(Exception):
    """Raised when a settings file fails parsing or validation."""


class ServerSettings(BaseModel):
    """Identity reported by ``initialize``."""

    name: str = "cassini-mcp-server"
    version: str = __version__


class DatabaseSettings(BaseModel):
    path: Path = Path("Data/master_plan.db")


class HttpSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    path: str = "/mcp"


class LoggingSettings(BaseModel):
    level: LogLevel = "INFO"


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    console: bool = False
    otlp_endpoint: str | None = None


class Settings(BaseModel):
    """Top-level settings."""

    server: ServerSettings = Field(default_factory=ServerSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)


class SettingsLoader:
    """Load and validate a settings YAML file into :class:`Settings`."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path

    def load(self) -> Settings:
        """Read YAML, interpolate env vars, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing.  Without a path
        the defaults are returned.

        Raises:
            ConfigError: On read errors, YAML parse errors or schema
                validation failures.
        """
        if self._path is None:
            return Settings()

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
            return Settings()
        if not isinstance(data, dict):
            raise ConfigError("Settings YAML must be a mapping")

        try:
            return Settings.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc

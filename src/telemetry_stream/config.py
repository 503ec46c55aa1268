"""Configuration loading for telemetry_stream."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


@dataclass
class AgentConfig:
    """Agent side: where to send samples and how often."""

    host: str = "127.0.0.1"
    port: int = 8080
    interval_seconds: float = 1.0
    reconnect_backoff_seconds: float = 2.0
    connect_timeout_seconds: float = 5.0
    status_every: int = 10
    cpu: bool = True
    memory: bool = True

    @property
    def address(self) -> tuple[str, int]:
        return (self.host, self.port)


@dataclass
class ServerConfig:
    """Collector side: listening address and presentation settings."""

    host: str = "127.0.0.1"
    port: int = 8080
    read_buffer_size: int = 4096
    clear_screen: bool = True
    console: bool = True
    browser_url: str = "about:blank"

    @property
    def address(self) -> tuple[str, int]:
        return (self.host, self.port)


@dataclass
class TelemetryStreamConfig:
    """Top-level telemetry_stream configuration."""

    log_level: str = "INFO"
    agent: AgentConfig = field(default_factory=AgentConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


_ENV_MAP: dict[str, tuple[str, ...]] = {
    "TELEMETRY_STREAM_LOG_LEVEL": ("log_level",),
    "TELEMETRY_STREAM_AGENT_HOST": ("agent", "host"),
    "TELEMETRY_STREAM_AGENT_PORT": ("agent", "port"),
    "TELEMETRY_STREAM_AGENT_INTERVAL": ("agent", "interval_seconds"),
    "TELEMETRY_STREAM_AGENT_BACKOFF": ("agent", "reconnect_backoff_seconds"),
    "TELEMETRY_STREAM_SERVER_HOST": ("server", "host"),
    "TELEMETRY_STREAM_SERVER_PORT": ("server", "port"),
    "TELEMETRY_STREAM_BROWSER_URL": ("server", "browser_url"),
}

_INT_KEYS = {"port"}
_FLOAT_KEYS = {"interval_seconds", "reconnect_backoff_seconds"}


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides using the TELEMETRY_STREAM_ prefix."""
    for env_key, path in _ENV_MAP.items():
        value = os.environ.get(env_key)
        if value is None:
            continue
        obj = data
        for part in path[:-1]:
            if not isinstance(obj.get(part), dict):
                obj[part] = {}
            obj = obj[part]
        final_key = path[-1]
        if final_key in _INT_KEYS:
            obj[final_key] = int(value)
        elif final_key in _FLOAT_KEYS:
            obj[final_key] = float(value)
        else:
            obj[final_key] = value
    return data


def _section(cls: type, data: Any) -> Any:
    if not isinstance(data, dict):
        data = {}
    return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


def _dict_to_config(data: dict[str, Any]) -> TelemetryStreamConfig:
    """Convert a raw dictionary to a TelemetryStreamConfig dataclass."""
    return TelemetryStreamConfig(
        log_level=str(data.get("log_level", "INFO")).upper(),
        agent=_section(AgentConfig, data.get("agent")),
        server=_section(ServerConfig, data.get("server")),
    )


def load_config(path: str | Path | None = None) -> TelemetryStreamConfig:
    """Load configuration from a YAML file with environment overrides.

    Looks for ``telemetry_stream.yaml`` in the current directory if *path* is
    None. A missing file yields the defaults.
    """
    data: dict[str, Any] = {}
    if path is None:
        path = Path("telemetry_stream.yaml")
    else:
        path = Path(path)

    if path.exists():
        with open(path, encoding="utf-8") as fh:
            loaded = yaml.safe_load(fh)
            if isinstance(loaded, dict):
                data = loaded

    data = _apply_env_overrides(data)
    return _dict_to_config(data)

"""Tests for the configuration module."""

import os
import tempfile

import yaml

from telemetry_stream.config import (
    AgentConfig,
    ServerConfig,
    TelemetryStreamConfig,
    load_config,
)


def test_load_config_defaults():
    """Loading from a non-existent file returns defaults."""
    cfg = load_config("/tmp/nonexistent_telemetry_stream.yaml")
    assert isinstance(cfg, TelemetryStreamConfig)
    assert cfg.log_level == "INFO"
    assert cfg.agent.address == ("127.0.0.1", 8080)
    assert cfg.agent.interval_seconds == 1.0
    assert cfg.agent.reconnect_backoff_seconds == 2.0
    assert cfg.agent.status_every == 10
    assert cfg.agent.cpu is True
    assert cfg.agent.memory is True
    assert cfg.server.address == ("127.0.0.1", 8080)
    assert cfg.server.read_buffer_size == 4096


def test_load_config_from_yaml():
    """Loading from a YAML file populates values and ignores unknown keys."""
    data = {
        "log_level": "debug",
        "agent": {
            "host": "10.0.0.5",
            "port": 9000,
            "interval_seconds": 0.25,
            "memory": False,
            "not_a_setting": 1,
        },
        "server": {
            "host": "0.0.0.0",
            "clear_screen": False,
        },
    }
    with tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False) as fh:
        yaml.dump(data, fh)
        path = fh.name

    try:
        cfg = load_config(path)
        assert cfg.log_level == "DEBUG"
        assert cfg.agent == AgentConfig(host="10.0.0.5", port=9000, interval_seconds=0.25, memory=False)
        assert cfg.server.host == "0.0.0.0"
        assert cfg.server.clear_screen is False
        assert cfg.server.port == 8080
    finally:
        os.unlink(path)


def test_empty_sections_use_defaults():
    with tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False) as fh:
        fh.write("agent:\nserver:\n")
        path = fh.name

    try:
        cfg = load_config(path)
        assert cfg.agent == AgentConfig()
        assert cfg.server == ServerConfig()
    finally:
        os.unlink(path)


def test_env_override():
    """Environment variables override YAML values, with numeric coercion."""
    data = {"agent": {"host": "yaml-host", "port": 1111}}
    with tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False) as fh:
        yaml.dump(data, fh)
        path = fh.name

    try:
        os.environ["TELEMETRY_STREAM_AGENT_HOST"] = "env-host"
        os.environ["TELEMETRY_STREAM_AGENT_PORT"] = "9100"
        os.environ["TELEMETRY_STREAM_AGENT_INTERVAL"] = "0.5"
        os.environ["TELEMETRY_STREAM_SERVER_PORT"] = "9200"
        cfg = load_config(path)
        assert cfg.agent.host == "env-host"
        assert cfg.agent.port == 9100
        assert cfg.agent.interval_seconds == 0.5
        assert cfg.server.port == 9200
    finally:
        for key in (
            "TELEMETRY_STREAM_AGENT_HOST",
            "TELEMETRY_STREAM_AGENT_PORT",
            "TELEMETRY_STREAM_AGENT_INTERVAL",
            "TELEMETRY_STREAM_SERVER_PORT",
        ):
            os.environ.pop(key, None)
        os.unlink(path)

"""Tests for configuration loading."""

import pytest

from parpass.config.settings import ConfigurationManager, load_config
from parpass.config.utils import deep_merge, validate_url
from parpass.exceptions import ConfigError

def test_defaults(tmp_path):
    config = load_config()

    assert config.api_url == "http://localhost:3001/api"
    assert config.recommendation_url == "http://localhost:3002"
    assert config.request_timeout == (5.0, 20.0)
    assert config.timezone == "UTC"
    assert config.config_dir == str(tmp_path)
    assert config.logging.default_level == "WARNING"

def test_config_file_and_env_precedence(tmp_path, monkeypatch):
    (tmp_path / "config.yaml").write_text(
        "api:\n"
        "  url: https://parpass.example.com/api/\n"
        "  read_timeout: 30\n"
        "timezone: America/Phoenix\n"
        "credentials_file: creds.json\n"
    )
    monkeypatch.setenv("PARPASS_TIMEZONE", "America/Denver")

    config = load_config()

    assert config.api_url == "https://parpass.example.com/api"
    assert config.request_timeout == (5.0, 30.0)
    assert config.timezone == "America/Denver"
    assert config.credentials_file == str(tmp_path / "creds.json")

def test_config_is_cached(monkeypatch):
    first = load_config()
    monkeypatch.setenv("PARPASS_API_URL", "http://other:9000/api")
    assert load_config() is first
    assert ConfigurationManager().reload_config().api_url == "http://other:9000/api"

@pytest.mark.parametrize("var,value", [
    ("PARPASS_API_URL", "ftp://files.example.com"),
    ("PARPASS_TIMEOUT", "soon"),
    ("PARPASS_TIMEZONE", "Mars/Olympus"),
])
def test_invalid_settings(monkeypatch, var, value):
    monkeypatch.setenv(var, value)
    with pytest.raises(ConfigError):
        load_config()

def test_invalid_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text("api: [unclosed\n")
    with pytest.raises(ConfigError):
        load_config()

def test_log_file_env_enables_file_logging(tmp_path, monkeypatch):
    monkeypatch.setenv("PARPASS_LOG_FILE", str(tmp_path / "parpass.log"))
    config = load_config()
    assert config.logging.file.enabled
    assert config.logging.file.path == str(tmp_path / "parpass.log")

def test_deep_merge():
    base = {"api": {"url": "a", "read_timeout": 20}, "timezone": "UTC"}
    merged = deep_merge(base, {"api": {"url": "b"}})
    assert merged == {"api": {"url": "b", "read_timeout": 20}, "timezone": "UTC"}
    assert base["api"]["url"] == "a"

def test_validate_url():
    assert validate_url("http://localhost:3001/api/", "api.url") == "http://localhost:3001/api"
    with pytest.raises(ValueError):
        validate_url("", "api.url")

"""
Unit tests for API configuration loading.
"""

import pytest
from pydantic import ValidationError

from src.api import api_config as api_config_module
from src.api.api_config import ApiConfig, load_api_config


def test_defaults_apply_without_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("API_PORT", "PORT", "DATABASE_URL", "STORAGE_BACKEND", "LOG_LEVEL", "API_ALLOWED_ORIGINS"):
        monkeypatch.delenv(name, raising=False)

    config = load_api_config(load_env=False)

    assert config.port == 8080
    assert config.database_url == api_config_module.DEFAULT_DATABASE_URL
    assert config.storage_backend == "sql"
    assert config.log_level == "INFO"
    assert config.allowed_origins == ["*"]
    assert config.api_version_label() == "v1"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("API_PORT", raising=False)
    monkeypatch.setenv("PORT", "9090")
    monkeypatch.setenv("STORAGE_BACKEND", "MEMORY")
    monkeypatch.setenv("API_ALLOWED_ORIGINS", "http://a.example, http://b.example")
    monkeypatch.setenv("API_ENABLE_REQUEST_LOGGING", "no")

    config = load_api_config(load_env=False)

    assert config.port == 9090
    assert config.storage_backend == "memory"
    assert config.allowed_origins == ["http://a.example", "http://b.example"]
    assert config.enable_request_logging is False


def test_api_port_takes_precedence_over_port(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "9090")
    monkeypatch.setenv("API_PORT", "7000")

    assert load_api_config(load_env=False).port == 7000


def test_invalid_boolean_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("API_AUTO_CREATE_SCHEMA", "maybe")
    with pytest.raises(ValueError, match="API_AUTO_CREATE_SCHEMA must be boolean-like"):
        load_api_config(load_env=False)


@pytest.mark.parametrize(
    "field_values",
    [
        {"api_version_path": "api/v1"},
        {"api_version_path": "/api/latest"},
        {"subscriptions_table_name": "subscriptions; DROP TABLE x"},
        {"storage_backend": "redis"},
        {"port": 0},
    ],
)
def test_invalid_fields_fail_validation(field_values: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        ApiConfig(**field_values)


def test_config_is_immutable() -> None:
    config = ApiConfig()
    with pytest.raises(ValidationError):
        config.port = 1

from __future__ import annotations

import pytest

from intent_relay.config import AppSettings
from intent_relay.domain import StorageKind
from intent_relay.orchestration import ConfigurationError, RequestMiddlewareConfig, TransportDefaults


def test_settings_defaults() -> None:
    settings = AppSettings()

    assert settings.identity == "http"
    assert settings.timeout == 20.0
    assert settings.storage is StorageKind.MEMORY
    assert settings.follow_redirects is True
    assert TransportDefaults().follow_redirects is True


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RELAY_ENV", "test")
    monkeypatch.setenv("RELAY_IDENTITY", "backend")
    monkeypatch.setenv("RELAY_BASE_URL", "https://api.example.test")
    monkeypatch.setenv("RELAY_TIMEOUT", "7.5")
    monkeypatch.setenv("RELAY_FOLLOW_REDIRECTS", "no")
    monkeypatch.setenv("RELAY_STORAGE", "Session")

    settings = AppSettings.from_env()

    assert settings.environment == "test"
    assert settings.identity == "backend"
    assert settings.base_url == "https://api.example.test"
    assert settings.timeout == 7.5
    assert settings.follow_redirects is False
    assert settings.storage is StorageKind.SESSION


def test_middleware_config_validation() -> None:
    with pytest.raises(ConfigurationError):
        RequestMiddlewareConfig(identity="")
    with pytest.raises(ConfigurationError):
        RequestMiddlewareConfig(identity="api", defaults=TransportDefaults(timeout=0))

import httpx
import pytest
from pytest import MonkeyPatch

from mcp_solana_tracker.config import DEFAULT_BASE_URL, ConfigurationError, Settings, load_settings
from mcp_solana_tracker.dispatcher import create_http_client


def test_missing_api_key_is_fatal(monkeypatch: MonkeyPatch):
    monkeypatch.delenv("SOLANA_TRACKER_API_KEY", raising=False)

    with pytest.raises(ConfigurationError, match="SOLANA_TRACKER_API_KEY"):
        load_settings()


def test_defaults(monkeypatch: MonkeyPatch):
    monkeypatch.setenv("SOLANA_TRACKER_API_KEY", "key")
    monkeypatch.delenv("SOLANA_TRACKER_BASE_URL", raising=False)
    monkeypatch.delenv("SOLANA_TRACKER_TIMEOUT", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    settings = load_settings()

    assert settings.api_key == "key"
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.timeout == 30.0
    assert settings.log_level == "INFO"


def test_overrides(monkeypatch: MonkeyPatch):
    monkeypatch.setenv("SOLANA_TRACKER_API_KEY", "key")
    monkeypatch.setenv("SOLANA_TRACKER_BASE_URL", "http://localhost:9000")
    monkeypatch.setenv("SOLANA_TRACKER_TIMEOUT", "5")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.base_url == "http://localhost:9000"
    assert settings.timeout == 5.0
    assert settings.log_level == "DEBUG"


def test_invalid_timeout(monkeypatch: MonkeyPatch):
    monkeypatch.setenv("SOLANA_TRACKER_API_KEY", "key")
    monkeypatch.setenv("SOLANA_TRACKER_TIMEOUT", "soon")

    with pytest.raises(ConfigurationError, match="SOLANA_TRACKER_TIMEOUT"):
        load_settings()


def test_api_key_not_in_repr():
    settings = Settings(api_key="super-secret")
    assert "super-secret" not in repr(settings)


@pytest.mark.asyncio
async def test_http_client_configuration():
    client = create_http_client(Settings(api_key="key", base_url="https://example.test", timeout=12.0))
    try:
        assert isinstance(client, httpx.AsyncClient)
        assert client.base_url.host == "example.test"
        assert client.headers["x-api-key"] == "key"
        assert client.timeout.read == 12.0
    finally:
        await client.aclose()


def test_invalid_log_level(monkeypatch: MonkeyPatch):
    monkeypatch.setenv("SOLANA_TRACKER_API_KEY", "key")
    monkeypatch.setenv("LOG_LEVEL", "verbose")

    with pytest.raises(ConfigurationError, match="LOG_LEVEL"):
        load_settings()

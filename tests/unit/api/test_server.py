"""Tests for application startup and shutdown."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from commgate.api.dependencies import get_provider_clients, get_settings
from commgate.api.server import create_app
from commgate.core.domain.errors import MissingCredentialsError


@pytest.fixture(autouse=True)
def _fresh_caches():
    get_settings.cache_clear()
    get_provider_clients.cache_clear()
    yield
    get_settings.cache_clear()
    get_provider_clients.cache_clear()


def test_startup_fails_without_credentials(monkeypatch):
    for name in ("TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN", "SENDGRID_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("COMMGATE_CONFIG", raising=False)

    with pytest.raises(MissingCredentialsError) as exc_info:
        with TestClient(create_app()):
            pass
    assert "TWILIO_ACCOUNT_SID" in exc_info.value.missing


def test_startup_builds_clients_from_environment(credential_env, monkeypatch):
    monkeypatch.delenv("COMMGATE_CONFIG", raising=False)

    with TestClient(create_app()) as client:
        assert client.get("/health").status_code == 200
        clients = get_provider_clients()
        assert clients.sms.provider_name == "sms"
        assert clients.email.provider_name == "email"


def test_shutdown_closes_clients():
    clients = MagicMock()
    clients.aclose = AsyncMock()
    app = create_app()
    app.dependency_overrides[get_provider_clients] = lambda: clients

    with TestClient(app) as client:
        client.get("/health")

    clients.aclose.assert_awaited_once()

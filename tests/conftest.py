"""Test configuration and shared fixtures."""

from __future__ import annotations

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestServer

from commgate.core.domain.credentials import BasicCredentials, BearerCredentials
from tests.mock_provider import MockProvider

CREDENTIAL_ENV = {
    "TWILIO_ACCOUNT_SID": "AC123",
    "TWILIO_AUTH_TOKEN": "secret-token",
    "SENDGRID_API_KEY": "SG.test-key",
}


@pytest.fixture
def basic_credentials() -> BasicCredentials:
    return BasicCredentials(account_sid="AC123", auth_token="secret-token")


@pytest.fixture
def bearer_credentials() -> BearerCredentials:
    return BearerCredentials(api_key="SG.test-key")


@pytest.fixture
def credential_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set all provider credentials in the process environment."""
    for name, value in CREDENTIAL_ENV.items():
        monkeypatch.setenv(name, value)
    return dict(CREDENTIAL_ENV)


@pytest_asyncio.fixture
async def mock_provider():
    """Start the in-process provider double and yield it with its base URL."""
    provider = MockProvider()
    server = TestServer(provider.build_app())
    await server.start_server()
    provider.base_url = str(server.make_url("/")).rstrip("/")
    yield provider
    await server.close()

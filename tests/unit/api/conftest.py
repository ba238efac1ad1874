"""Fixtures for API route tests: the app wired to mock provider clients."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from commgate.api.dependencies import get_provider_clients
from commgate.api.server import create_app
from commgate.core.domain.operations import ProviderResponse
from commgate.infrastructure.providers.registry import ProviderClients


def _mock_clients() -> ProviderClients:
    conversation = AsyncMock()
    conversation.create_conversation = AsyncMock(
        return_value=ProviderResponse(201, {"sid": "CH1", "friendly_name": "Support"})
    )
    conversation.delete_conversation = AsyncMock(return_value=ProviderResponse(204))
    conversation.create_message = AsyncMock(
        return_value=ProviderResponse(201, {"sid": "IM1", "body": "hello"})
    )
    conversation.list_messages = AsyncMock(
        return_value=ProviderResponse(200, {"messages": [{"sid": "IM1"}], "meta": {}})
    )
    conversation.delete_message = AsyncMock(return_value=ProviderResponse(404))
    conversation.upload_media = AsyncMock(
        return_value=ProviderResponse(201, {"sid": "ME1", "size": 5})
    )
    conversation.retrieve_media = AsyncMock(
        return_value=ProviderResponse(200, {"sid": "ME1", "links": {}})
    )
    sms = AsyncMock()
    sms.create_message = AsyncMock(
        return_value=ProviderResponse(201, {"sid": "SM1", "status": "queued"})
    )
    voice = AsyncMock()
    voice.create_call = AsyncMock(return_value=ProviderResponse(201, {"sid": "CA1"}))
    email = AsyncMock()
    email.send_mail = AsyncMock(return_value=ProviderResponse(202))
    return ProviderClients(conversation=conversation, sms=sms, voice=voice, email=email)


@pytest.fixture
def clients() -> ProviderClients:
    return _mock_clients()


@pytest.fixture
def client(clients):
    app = create_app()
    app.dependency_overrides[get_provider_clients] = lambda: clients
    yield TestClient(app)
    app.dependency_overrides.clear()

"""Provider client registry.

Creates all four provider clients from ``GatewaySettings`` once per process.
The resulting container is immutable and shared across request tasks.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

import structlog

from commgate.config.settings import GatewaySettings
from commgate.core.interfaces.providers import (
    ConversationProviderProtocol,
    EmailProviderProtocol,
    SmsProviderProtocol,
    VoiceProviderProtocol,
)
from commgate.infrastructure.providers.conversation import ConversationClient
from commgate.infrastructure.providers.email import EmailClient
from commgate.infrastructure.providers.sms import SmsClient
from commgate.infrastructure.providers.voice import VoiceClient


@dataclass(frozen=True)
class ProviderClients:
    """All wired provider clients.

    Attributes:
        conversation: Conversations, messages and media.
        sms: Outbound SMS.
        voice: Outgoing calls.
        email: Transactional email.
    """

    conversation: ConversationProviderProtocol
    sms: SmsProviderProtocol
    voice: VoiceProviderProtocol
    email: EmailProviderProtocol

    async def aclose(self) -> None:
        """Close every client's connection pool."""
        await asyncio.gather(
            self.conversation.aclose(),
            self.sms.aclose(),
            self.voice.aclose(),
            self.email.aclose(),
        )


def build_provider_clients(settings: GatewaySettings) -> ProviderClients:
    """Build all provider clients from settings.

    Conversation, SMS and voice share the account credentials; email uses
    its bearer token.

    Args:
        settings: Loaded gateway settings.

    Returns:
        ProviderClients ready to be injected into routes.
    """
    logger = structlog.get_logger()
    endpoints = settings.endpoints
    timeout = settings.connect_timeout_seconds

    clients = ProviderClients(
        conversation=ConversationClient(
            endpoints.conversations,
            endpoints.media,
            settings.account,
            chunk_size=settings.chunk_size,
            connect_timeout=timeout,
        ),
        sms=SmsClient(endpoints.api, settings.account, connect_timeout=timeout),
        voice=VoiceClient(endpoints.voice, settings.account, connect_timeout=timeout),
        email=EmailClient(endpoints.email, settings.email, connect_timeout=timeout),
    )
    logger.info(
        "providers.configured",
        conversation=endpoints.conversations,
        media=endpoints.media,
        sms=endpoints.api,
        voice=endpoints.voice,
        email=endpoints.email,
        chunk_size=settings.chunk_size,
    )
    return clients

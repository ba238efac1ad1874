"""Provider clients: one aiohttp-backed client per provider family."""

from commgate.infrastructure.providers.conversation import ConversationClient
from commgate.infrastructure.providers.email import EmailClient
from commgate.infrastructure.providers.registry import ProviderClients, build_provider_clients
from commgate.infrastructure.providers.sms import SmsClient
from commgate.infrastructure.providers.voice import VoiceClient

__all__ = [
    "ConversationClient",
    "EmailClient",
    "ProviderClients",
    "SmsClient",
    "VoiceClient",
    "build_provider_clients",
]

"""
Core Protocol Interfaces

Protocols for every provider client the gateway talks to. Routes depend on
these contracts, not on the aiohttp-backed implementations.
"""

from commgate.core.interfaces.providers import (
    ConversationProviderProtocol,
    EmailProviderProtocol,
    ProviderClientProtocol,
    SmsProviderProtocol,
    VoiceProviderProtocol,
)

__all__ = [
    "ConversationProviderProtocol",
    "EmailProviderProtocol",
    "ProviderClientProtocol",
    "SmsProviderProtocol",
    "VoiceProviderProtocol",
]

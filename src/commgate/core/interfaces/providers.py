"""Protocol definitions for provider clients.

One protocol per provider family:
- ConversationProviderProtocol: conversations, messages and media
- SmsProviderProtocol: outbound SMS
- VoiceProviderProtocol: outgoing calls
- EmailProviderProtocol: transactional email

Implementations own the provider base URL and authentication scheme and are
shared read-only across concurrent requests.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from commgate.core.domain.email import MailData
from commgate.core.domain.media import RemoteMediaHandle, UploadMediaHandle
from commgate.core.domain.operations import ProviderResponse, VoiceCall


class ProviderClientProtocol(Protocol):
    """Lifecycle shared by every provider client."""

    async def aclose(self) -> None:
        """Release the pooled HTTP connections."""
        ...


class ConversationProviderProtocol(ProviderClientProtocol, Protocol):
    """Conversations, messages and media objects."""

    async def create_conversation(self, fields: Mapping[str, Any]) -> ProviderResponse:
        """Create a conversation from a provider-defined field mapping."""
        ...

    async def delete_conversation(self, conversation_sid: str) -> ProviderResponse:
        """Delete a conversation; the response carries no payload."""
        ...

    async def create_message(
        self, conversation_sid: str, fields: Mapping[str, Any]
    ) -> ProviderResponse:
        """Post a message into a conversation."""
        ...

    async def list_messages(self, conversation_sid: str) -> ProviderResponse:
        """List the messages of a conversation."""
        ...

    async def delete_message(
        self, conversation_sid: str, message_sid: str
    ) -> ProviderResponse:
        """Delete one message; the response carries no payload."""
        ...

    async def upload_media(
        self, handle: UploadMediaHandle, service_sid: str
    ) -> ProviderResponse:
        """Stream a local file into a media service namespace.

        Raises:
            MediaSourceUnavailableError: If the file cannot be opened.
        """
        ...

    async def retrieve_media(self, handle: RemoteMediaHandle) -> ProviderResponse:
        """Fetch the metadata descriptor of a media object."""
        ...


class SmsProviderProtocol(ProviderClientProtocol, Protocol):
    """Outbound SMS."""

    async def create_message(self, fields: Mapping[str, Any]) -> ProviderResponse:
        """Send an SMS from a provider-defined field mapping."""
        ...


class VoiceProviderProtocol(ProviderClientProtocol, Protocol):
    """Outgoing calls."""

    async def create_call(self, call: VoiceCall) -> ProviderResponse:
        """Place an outgoing call."""
        ...


class EmailProviderProtocol(ProviderClientProtocol, Protocol):
    """Transactional email."""

    async def send_mail(self, mail: MailData) -> ProviderResponse:
        """Send one email."""
        ...

"""Conversation provider client: conversations, messages and media."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import aiohttp

from commgate.core.domain.credentials import BasicCredentials
from commgate.core.domain.errors import GatewayError, ResponseMalformedError
from commgate.core.domain.media import (
    MediaTransfer,
    RemoteMediaHandle,
    TransferState,
    UploadMediaHandle,
)
from commgate.core.domain.operations import OperationRequest, ProviderResponse
from commgate.infrastructure.providers.base import BaseProviderClient
from commgate.infrastructure.providers.media import (
    build_multipart_body,
    log_transition,
    open_media_source,
    read_chunks,
)

MESSAGES_KEY = "messages"


class ConversationClient(BaseProviderClient):
    """Client for the conversation REST API and its media content service.

    Uses two base URLs: one for conversations and messages, one for media
    objects grouped under a service namespace.
    """

    provider_name = "conversation"

    def __init__(
        self,
        base_url: str,
        media_base_url: str,
        credentials: BasicCredentials,
        *,
        chunk_size: int = 64 * 1024,
        connect_timeout: float = 10.0,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        super().__init__(
            base_url,
            credentials,
            connect_timeout=connect_timeout,
            session=session,
        )
        self._media_base_url = media_base_url.rstrip("/")
        self._chunk_size = chunk_size

    def _media_url(self, *segments: str) -> str:
        return self._url(*segments, base=self._media_base_url)

    # ------------------------------------------------------------------
    # Conversations
    # ------------------------------------------------------------------

    async def create_conversation(self, fields: Mapping[str, Any]) -> ProviderResponse:
        request = OperationRequest("create_conversation", dict(fields))
        return await self._call(
            "POST",
            self._url("Conversations"),
            operation=request.operation,
            data=request.form_pairs(),
        )

    async def delete_conversation(self, conversation_sid: str) -> ProviderResponse:
        return await self._delete(
            self._url("Conversations", conversation_sid),
            operation="delete_conversation",
        )

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    async def create_message(
        self, conversation_sid: str, fields: Mapping[str, Any]
    ) -> ProviderResponse:
        request = OperationRequest("create_message", dict(fields))
        return await self._call(
            "POST",
            self._url("Conversations", conversation_sid, "Messages"),
            operation=request.operation,
            data=request.form_pairs(),
        )

    async def list_messages(self, conversation_sid: str) -> ProviderResponse:
        response = await self._call(
            "GET",
            self._url("Conversations", conversation_sid, "Messages"),
            operation="list_messages",
        )
        payload = response.payload
        if not isinstance(payload, dict) or not isinstance(payload.get(MESSAGES_KEY), list):
            self._logger.error("provider.response.malformed", operation="list_messages")
            raise ResponseMalformedError(
                f"Message list has no '{MESSAGES_KEY}' collection",
                provider=self.provider_name,
                details={"operation": "list_messages"},
            )
        return response

    async def delete_message(
        self, conversation_sid: str, message_sid: str
    ) -> ProviderResponse:
        return await self._delete(
            self._url("Conversations", conversation_sid, "Messages", message_sid),
            operation="delete_message",
        )

    # ------------------------------------------------------------------
    # Media
    # ------------------------------------------------------------------

    async def upload_media(
        self, handle: UploadMediaHandle, service_sid: str
    ) -> ProviderResponse:
        """Stream a local file into ``service_sid`` as one multipart POST.

        The file is opened before any network I/O, so an unreadable source
        fails with no outbound request.

        Raises:
            MediaSourceUnavailableError: If the file cannot be opened.
            ProviderUnreachableError: On transport failure, including mid-stream.
            ResponseMalformedError: If the confirmation body cannot be parsed.
        """
        transfer = MediaTransfer(handle=handle, service_sid=service_sid)
        try:
            async with open_media_source(handle) as source:
                body = build_multipart_body(
                    read_chunks(source, self._chunk_size, transfer), handle
                )
                log_transition(transfer, TransferState.STREAMING)
                response = await self._call(
                    "POST",
                    self._media_url("Services", service_sid, "Media"),
                    operation="upload_media",
                    data=body,
                )
        except GatewayError as exc:
            transfer.error = exc.code
            log_transition(transfer, TransferState.FAILED)
            raise
        log_transition(transfer, TransferState.COMPLETED)
        return response

    async def retrieve_media(self, handle: RemoteMediaHandle) -> ProviderResponse:
        """Return the media descriptor; the binary itself is not fetched."""
        return await self._call(
            "GET",
            self._media_url("Services", handle.service_sid, "Media", handle.media_sid),
            operation="retrieve_media",
        )

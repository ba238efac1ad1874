"""Conversation routes.

- ``GET|POST /chat`` -- create a conversation
- ``DELETE /chat/delete/{conversation_id}`` -- delete a conversation
- ``POST /chat/message/{conversation_id}`` -- post a message
- ``GET  /chat/list/{conversation_id}`` -- list messages
- ``DELETE /chat/message/delete/{conversation_id}/{message_id}`` -- delete a message
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from commgate.api.dependencies import get_conversation_client, read_field_mapping
from commgate.api.errors import envelope_response
from commgate.api.schemas.errors import ErrorResponse
from commgate.application.response_normalizer import normalize_success
from commgate.core.interfaces.providers import ConversationProviderProtocol

router = APIRouter(
    prefix="/chat",
    responses={
        422: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)


@router.api_route("", methods=["GET", "POST"])
async def create_conversation(
    fields: dict[str, Any] = Depends(read_field_mapping),
    conversation: ConversationProviderProtocol = Depends(get_conversation_client),
) -> Response:
    """Create a conversation from a provider-defined field mapping."""
    result = await conversation.create_conversation(fields)
    return envelope_response(normalize_success(result))


@router.delete("/delete/{conversation_id}", status_code=204)
async def delete_conversation(
    conversation_id: str,
    conversation: ConversationProviderProtocol = Depends(get_conversation_client),
) -> Response:
    """Delete a conversation. Already-deleted conversations also answer 204."""
    await conversation.delete_conversation(conversation_id)
    return Response(status_code=204)


@router.post("/message/{conversation_id}")
async def create_message(
    conversation_id: str,
    fields: dict[str, Any] = Depends(read_field_mapping),
    conversation: ConversationProviderProtocol = Depends(get_conversation_client),
) -> Response:
    result = await conversation.create_message(conversation_id, fields)
    return envelope_response(normalize_success(result))


@router.get("/list/{conversation_id}")
async def list_messages(
    conversation_id: str,
    conversation: ConversationProviderProtocol = Depends(get_conversation_client),
) -> Response:
    result = await conversation.list_messages(conversation_id)
    return envelope_response(normalize_success(result))


@router.delete("/message/delete/{conversation_id}/{message_id}", status_code=204)
async def delete_message(
    conversation_id: str,
    message_id: str,
    conversation: ConversationProviderProtocol = Depends(get_conversation_client),
) -> Response:
    await conversation.delete_message(conversation_id, message_id)
    return Response(status_code=204)

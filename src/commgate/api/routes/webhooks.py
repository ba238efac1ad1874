"""Inbound provider webhooks.

These are sinks: each logs the callback and acknowledges it. The voice
webhook answers with a fixed call-instructions document.

- ``POST /chat/receive`` -- conversation events
- ``POST /sms/receive`` -- inbound SMS
- ``POST /voice`` -- inbound call
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from commgate.api.dependencies import read_field_mapping

router = APIRouter(tags=["webhooks"])
logger = structlog.get_logger()

VOICE_ACKNOWLEDGMENT = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    "<Response><Say>Thank you for calling. Goodbye.</Say><Hangup/></Response>"
)

# Identifier fields safe to log; message bodies and numbers are not logged.
_LOGGED_FIELDS = (
    "EventType",
    "ConversationSid",
    "MessageSid",
    "SmsSid",
    "CallSid",
    "CallStatus",
    "AccountSid",
)


def _summary(fields: dict[str, Any]) -> dict[str, Any]:
    return {name: fields[name] for name in _LOGGED_FIELDS if name in fields}


@router.post("/chat/receive")
async def receive_chat_event(
    fields: dict[str, Any] = Depends(read_field_mapping),
) -> JSONResponse:
    logger.info("webhook.chat.received", field_count=len(fields), **_summary(fields))
    return JSONResponse({"received": True})


@router.post("/sms/receive")
async def receive_sms(
    fields: dict[str, Any] = Depends(read_field_mapping),
) -> JSONResponse:
    logger.info("webhook.sms.received", field_count=len(fields), **_summary(fields))
    return JSONResponse({"received": True})


@router.post("/voice")
async def receive_call(
    fields: dict[str, Any] = Depends(read_field_mapping),
) -> Response:
    logger.info("webhook.voice.received", field_count=len(fields), **_summary(fields))
    return Response(content=VOICE_ACKNOWLEDGMENT, media_type="application/xml")

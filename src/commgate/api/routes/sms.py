"""SMS route: ``POST /sms``."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from commgate.api.dependencies import get_sms_client, read_field_mapping
from commgate.api.errors import envelope_response
from commgate.api.schemas.errors import ErrorResponse
from commgate.application.response_normalizer import normalize_success
from commgate.core.interfaces.providers import SmsProviderProtocol

router = APIRouter(responses={422: {"model": ErrorResponse}, 502: {"model": ErrorResponse}})


@router.post("/sms")
async def send_sms(
    fields: dict[str, Any] = Depends(read_field_mapping),
    sms: SmsProviderProtocol = Depends(get_sms_client),
) -> Response:
    """Send an SMS; the field mapping (From, To, Body...) is forwarded verbatim."""
    result = await sms.create_message(fields)
    return envelope_response(normalize_success(result))

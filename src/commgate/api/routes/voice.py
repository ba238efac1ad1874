"""Voice route: ``POST /voice/call``."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from commgate.api.dependencies import get_voice_client
from commgate.api.errors import envelope_response
from commgate.api.schemas.errors import ErrorResponse
from commgate.api.schemas.voice_schemas import VoiceCallRequest
from commgate.application.response_normalizer import normalize_success
from commgate.core.interfaces.providers import VoiceProviderProtocol

router = APIRouter(responses={422: {"model": ErrorResponse}, 502: {"model": ErrorResponse}})


@router.post("/voice/call")
async def create_call(
    request: VoiceCallRequest,
    voice: VoiceProviderProtocol = Depends(get_voice_client),
) -> Response:
    """Place an outgoing call that runs the supplied markup."""
    result = await voice.create_call(request.to_domain())
    return envelope_response(normalize_success(result))

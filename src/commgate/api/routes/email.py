"""Email route: ``POST /email``."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from commgate.api.dependencies import get_email_client
from commgate.api.errors import envelope_response
from commgate.api.schemas.email_schemas import SendEmailRequest
from commgate.api.schemas.errors import ErrorResponse
from commgate.application.response_normalizer import normalize_success
from commgate.core.interfaces.providers import EmailProviderProtocol

router = APIRouter(responses={422: {"model": ErrorResponse}, 502: {"model": ErrorResponse}})


@router.post("/email")
async def send_email(
    request: SendEmailRequest,
    email: EmailProviderProtocol = Depends(get_email_client),
) -> Response:
    """Send a transactional email.

    Requests without a recipient, sender or subject are rejected with 422
    before the provider is contacted. An accepted send answers 204.
    """
    result = await email.send_mail(request.to_domain())
    return envelope_response(normalize_success(result))

"""Shared error-handling utilities for API routes.

Every failure, whether raised by a provider client or by request
validation, leaves the gateway as the same ``ErrorResponse`` envelope.
"""

from __future__ import annotations

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from commgate.application.response_normalizer import (
    GatewayEnvelope,
    error_body,
    normalize_error,
)
from commgate.core.domain.errors import GatewayError


def envelope_response(envelope: GatewayEnvelope) -> Response:
    """Render a gateway envelope as a FastAPI response."""
    if envelope.body is None:
        return Response(status_code=envelope.status_code)
    return JSONResponse(status_code=envelope.status_code, content=envelope.body)


async def gateway_error_handler(request: Request, exc: GatewayError) -> Response:
    """Return the error envelope for any gateway domain error."""
    return envelope_response(normalize_error(exc))


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render FastAPI request validation failures as error envelopes."""
    errors = jsonable_encoder(exc.errors())
    fields = [".".join(str(part) for part in error.get("loc", ())) for error in errors]
    return JSONResponse(
        status_code=422,
        content=error_body(
            code="validation_error",
            message=f"Invalid request: {', '.join(fields) or 'body'}",
            status=422,
            details={"errors": errors},
        ),
    )

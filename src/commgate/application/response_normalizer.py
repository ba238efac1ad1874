"""Collapse provider outcomes into the gateway response envelope.

A provider call ends in one of three ways: a parsed value, an empty
success, or an error. Success envelopes carry the provider payload
verbatim; error envelopes carry ``{code, message, status, details}``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog

from commgate.core.domain.errors import (
    GatewayError,
    MediaSourceUnavailableError,
    ProviderRejectedError,
    ProviderUnreachableError,
    ResponseMalformedError,
    ValidationError,
)
from commgate.core.domain.operations import ProviderResponse

logger = structlog.get_logger(__name__)

BAD_GATEWAY = 502


@dataclass(frozen=True)
class GatewayEnvelope:
    """Uniform response handed back to the HTTP layer.

    Attributes:
        status_code: HTTP status for the caller.
        body: JSON-serialisable body, or None for 204 responses.
    """

    status_code: int
    body: Any = None


def normalize_success(response: ProviderResponse) -> GatewayEnvelope:
    if response.is_empty:
        return GatewayEnvelope(status_code=204)
    return GatewayEnvelope(status_code=200, body=response.payload)


def status_for_error(error: GatewayError) -> int:
    """Pick the caller-facing HTTP status for a gateway error.

    An explicit 4xx/5xx ``status_code`` on the error wins; a provider
    rejection carries the provider's status there.
    """
    if error.status_code is not None and 400 <= error.status_code <= 599:
        return error.status_code
    if isinstance(error, ValidationError):
        return 422
    if isinstance(error, MediaSourceUnavailableError):
        return 400
    if isinstance(error, (ProviderRejectedError, ProviderUnreachableError, ResponseMalformedError)):
        return BAD_GATEWAY
    return 500


def error_body(
    *, code: str, message: str, status: int, details: dict[str, Any] | None = None
) -> dict[str, Any]:
    body: dict[str, Any] = {"code": code, "message": message, "status": status}
    if details:
        body["details"] = details
    return body


def normalize_error(error: GatewayError) -> GatewayEnvelope:
    """Convert a gateway error into an error envelope and log its kind."""
    status = status_for_error(error)
    log = logger.warning if status < 500 else logger.error
    log(
        "gateway.error",
        error_code=error.code,
        error_type=type(error).__name__,
        status=status,
        message=error.message,
    )
    return GatewayEnvelope(
        status_code=status,
        body=error_body(
            code=error.code,
            message=error.message,
            status=status,
            details=error.details,
        ),
    )

"""FastAPI dependency injection providers.

Settings and provider clients are created once and shared by every request
(``lru_cache``, testable via ``cache_clear()`` or ``dependency_overrides``).
"""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Any

from fastapi import Depends, Request

from commgate.config.settings import GatewaySettings, load_settings
from commgate.core.domain.errors import ValidationError
from commgate.core.interfaces.providers import (
    ConversationProviderProtocol,
    EmailProviderProtocol,
    SmsProviderProtocol,
    VoiceProviderProtocol,
)
from commgate.infrastructure.providers.registry import ProviderClients, build_provider_clients

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


# ---------------------------------------------------------------------------
# Settings and clients
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_settings() -> GatewaySettings:
    """Provide the process-wide settings, loaded from the environment once."""
    return load_settings()


@lru_cache(maxsize=1)
def get_provider_clients() -> ProviderClients:
    """Provide the shared provider clients."""
    return build_provider_clients(get_settings())


def get_conversation_client(
    clients: ProviderClients = Depends(get_provider_clients),
) -> ConversationProviderProtocol:
    return clients.conversation


def get_sms_client(
    clients: ProviderClients = Depends(get_provider_clients),
) -> SmsProviderProtocol:
    return clients.sms


def get_voice_client(
    clients: ProviderClients = Depends(get_provider_clients),
) -> VoiceProviderProtocol:
    return clients.voice


def get_email_client(
    clients: ProviderClients = Depends(get_provider_clients),
) -> EmailProviderProtocol:
    return clients.email


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------


async def read_field_mapping(request: Request) -> dict[str, Any]:
    """Read a provider field mapping from a JSON object or a form body.

    Key order is preserved. Repeated form keys collapse into a list. An
    empty body yields an empty mapping.

    Raises:
        ValidationError: If the body is neither a JSON object nor a form.
    """
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        fields: dict[str, Any] = {}
        for key, value in form.multi_items():
            if not isinstance(value, str):
                raise ValidationError(
                    f"Field '{key}' must be a text value",
                    details={"field": key},
                )
            if key in fields:
                existing = fields[key]
                fields[key] = [*existing, value] if isinstance(existing, list) else [existing, value]
            else:
                fields[key] = value
        return fields

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise ValidationError("Request body must be valid JSON or form-encoded fields") from exc
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object of provider fields")
    return data

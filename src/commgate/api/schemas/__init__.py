"""API Schemas Package."""

from commgate.api.schemas.email_schemas import SendEmailRequest
from commgate.api.schemas.errors import ErrorResponse
from commgate.api.schemas.voice_schemas import VoiceCallRequest

__all__ = [
    "ErrorResponse",
    "SendEmailRequest",
    "VoiceCallRequest",
]

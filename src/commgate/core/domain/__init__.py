"""
Domain Models

This package contains the core domain models for the gateway:
- Provider credentials
- Operation requests and provider responses
- Email and media models
- Error taxonomy
"""

from commgate.core.domain.credentials import BasicCredentials, BearerCredentials
from commgate.core.domain.email import (
    Attachment,
    Disposition,
    EmailAddress,
    MailContent,
    MailData,
    Personalization,
)
from commgate.core.domain.errors import (
    ConfigError,
    GatewayError,
    MediaSourceUnavailableError,
    MissingCredentialsError,
    ProviderRejectedError,
    ProviderUnreachableError,
    ResponseMalformedError,
    ValidationError,
)
from commgate.core.domain.media import (
    MediaTransfer,
    RemoteMediaHandle,
    TransferState,
    UploadMediaHandle,
)
from commgate.core.domain.operations import OperationRequest, ProviderResponse, VoiceCall

__all__ = [
    "Attachment",
    "BasicCredentials",
    "BearerCredentials",
    "ConfigError",
    "Disposition",
    "EmailAddress",
    "GatewayError",
    "MailContent",
    "MailData",
    "MediaSourceUnavailableError",
    "MediaTransfer",
    "MissingCredentialsError",
    "OperationRequest",
    "Personalization",
    "ProviderRejectedError",
    "ProviderResponse",
    "ProviderUnreachableError",
    "RemoteMediaHandle",
    "ResponseMalformedError",
    "TransferState",
    "UploadMediaHandle",
    "ValidationError",
    "VoiceCall",
]

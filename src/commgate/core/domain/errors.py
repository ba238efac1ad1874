"""Domain-specific exception types for the communication gateway."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class GatewayError(Exception):
    """Base exception for gateway domain errors."""

    message: str
    code: str = "gateway_error"
    details: Dict[str, Any] | None = None
    status_code: int | None = None

    def __post_init__(self) -> None:
        super().__init__(self.message)
        if self.details is None:
            self.details = {}


class ProviderUnreachableError(GatewayError):
    """The provider could not be reached or the connection broke before a reply."""

    def __init__(
        self,
        message: str,
        *,
        provider: str | None = None,
        details: Dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        if provider:
            details.setdefault("provider", provider)
        self.provider = provider
        super().__init__(message=message, code="provider_unreachable", details=details)


class ProviderRejectedError(GatewayError):
    """The provider answered with a non-success status.

    The provider's own error payload is kept on ``provider_response`` so it
    can be forwarded to the caller instead of being swallowed.
    """

    def __init__(
        self,
        message: str,
        *,
        provider: str | None = None,
        provider_status: int,
        provider_response: Any = None,
        details: Dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        if provider:
            details.setdefault("provider", provider)
        details.setdefault("provider_status", provider_status)
        details.setdefault("provider_response", provider_response)
        self.provider = provider
        self.provider_status = provider_status
        self.provider_response = provider_response
        super().__init__(
            message=message,
            code="provider_rejected",
            details=details,
            status_code=provider_status,
        )


class ResponseMalformedError(GatewayError):
    """The provider replied with a body that could not be understood."""

    def __init__(
        self,
        message: str,
        *,
        provider: str | None = None,
        details: Dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        if provider:
            details.setdefault("provider", provider)
        self.provider = provider
        super().__init__(message=message, code="response_malformed", details=details)


class MediaSourceUnavailableError(GatewayError):
    """A local media file could not be opened for upload."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        details: Dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        if path:
            details.setdefault("path", path)
        self.path = path
        super().__init__(message=message, code="media_source_unavailable", details=details)


class MissingCredentialsError(GatewayError):
    """Required provider credentials are absent from the environment."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(
            message=f"Missing required environment variables: {', '.join(self.missing)}",
            code="missing_credentials",
            details={"missing": self.missing},
        )


class ConfigError(GatewayError):
    """Error raised for configuration failures."""

    def __init__(self, message: str, *, details: Dict[str, Any] | None = None) -> None:
        super().__init__(message=message, code="config_error", details=details)


class ValidationError(GatewayError):
    """Error raised for validation failures."""

    def __init__(self, message: str, *, details: Dict[str, Any] | None = None) -> None:
        super().__init__(message=message, code="validation_error", details=details)

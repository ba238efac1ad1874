"""Gateway settings.

Credentials always come from the environment. Provider endpoints and
transfer tuning can additionally be set in a YAML file referenced by
``COMMGATE_CONFIG``; environment overrides win over the file.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import structlog
import yaml

from commgate.core.domain.credentials import BasicCredentials, BearerCredentials
from commgate.core.domain.errors import ConfigError, MissingCredentialsError

logger = structlog.get_logger()

TWILIO_ACCOUNT_SID = "TWILIO_ACCOUNT_SID"
TWILIO_AUTH_TOKEN = "TWILIO_AUTH_TOKEN"
SENDGRID_API_KEY = "SENDGRID_API_KEY"

DEFAULT_CHUNK_SIZE = 64 * 1024
DEFAULT_CONNECT_TIMEOUT = 10.0


@dataclass(frozen=True)
class ProviderEndpoints:
    """
    Base URLs of every provider API.

    Attributes:
        conversations: Conversation/chat REST API
        media: Media content service (uploads and descriptors)
        api: Core REST API hosting the SMS message resource
        voice: Voice REST API (already versioned)
        email: Transactional mail API
    """

    conversations: str = "https://conversations.twilio.com/v1"
    media: str = "https://mcs.us1.twilio.com/v1"
    api: str = "https://api.twilio.com"
    voice: str = "https://api.singapore.us1.twilio.com/2010-04-01"
    email: str = "https://api.sendgrid.com/v3/mail"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ProviderEndpoints":
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(
                f"Unknown provider endpoints: {', '.join(unknown)}",
                details={"unknown": unknown},
            )
        return cls(**{key: str(value).rstrip("/") for key, value in data.items()})


@dataclass(frozen=True)
class GatewaySettings:
    """
    Immutable process-wide configuration.

    Attributes:
        account: Identity/secret pair shared by conversation, SMS and voice
        email: Bearer token for the email provider
        endpoints: Provider base URLs
        chunk_size: Upper bound on bytes read per upload chunk
        connect_timeout_seconds: Connect timeout for outbound calls
    """

    account: BasicCredentials
    email: BearerCredentials
    endpoints: ProviderEndpoints = field(default_factory=ProviderEndpoints)
    chunk_size: int = DEFAULT_CHUNK_SIZE
    connect_timeout_seconds: float = DEFAULT_CONNECT_TIMEOUT

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ConfigError(
                "chunk_size must be a positive integer",
                details={"chunk_size": self.chunk_size},
            )
        if self.connect_timeout_seconds <= 0:
            raise ConfigError(
                "connect_timeout_seconds must be positive",
                details={"connect_timeout_seconds": self.connect_timeout_seconds},
            )


def _load_config_file(path: str | Path) -> dict[str, Any]:
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}", details={"path": str(config_path)})
    with open(config_path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")
    return data


def _parse_number(raw: Any, name: str, kind: type) -> Any:
    try:
        return kind(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}", details={"setting": name}) from exc


def load_settings(
    environ: Mapping[str, str] | None = None,
    config_path: str | Path | None = None,
) -> GatewaySettings:
    """Build settings from the environment and the optional YAML file.

    Args:
        environ: Environment mapping; defaults to ``os.environ``.
        config_path: YAML file path; defaults to ``$COMMGATE_CONFIG``.

    Returns:
        Validated, immutable settings.

    Raises:
        MissingCredentialsError: If any credential variable is absent or blank.
        ConfigError: If the YAML file or a tuning value is invalid.
    """
    env = os.environ if environ is None else environ

    missing = [
        name
        for name in (TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN, SENDGRID_API_KEY)
        if not (env.get(name) or "").strip()
    ]
    if missing:
        raise MissingCredentialsError(missing)

    settings = GatewaySettings(
        account=BasicCredentials(
            account_sid=env[TWILIO_ACCOUNT_SID].strip(),
            auth_token=env[TWILIO_AUTH_TOKEN].strip(),
        ),
        email=BearerCredentials(api_key=env[SENDGRID_API_KEY].strip()),
    )

    path = config_path or env.get("COMMGATE_CONFIG")
    if path:
        data = _load_config_file(path)
        endpoints = data.get("endpoints") or {}
        transfer = data.get("transfer") or {}
        http = data.get("http") or {}
        for section, value in (("endpoints", endpoints), ("transfer", transfer), ("http", http)):
            if not isinstance(value, Mapping):
                raise ConfigError(f"'{section}' section must be a mapping")
        settings = replace(
            settings,
            endpoints=ProviderEndpoints.from_mapping(endpoints),
            chunk_size=_parse_number(
                transfer.get("chunk_size", settings.chunk_size), "transfer.chunk_size", int
            ),
            connect_timeout_seconds=_parse_number(
                http.get("connect_timeout_seconds", settings.connect_timeout_seconds),
                "http.connect_timeout_seconds",
                float,
            ),
        )
        logger.info("settings.config_file_loaded", path=str(path))

    if env.get("COMMGATE_CHUNK_SIZE"):
        settings = replace(
            settings,
            chunk_size=_parse_number(env["COMMGATE_CHUNK_SIZE"], "COMMGATE_CHUNK_SIZE", int),
        )
    if env.get("COMMGATE_CONNECT_TIMEOUT"):
        settings = replace(
            settings,
            connect_timeout_seconds=_parse_number(
                env["COMMGATE_CONNECT_TIMEOUT"], "COMMGATE_CONNECT_TIMEOUT", float
            ),
        )

    return settings

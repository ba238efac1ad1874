"""Provider credentials.

Conversation, SMS and voice share one account identity/secret pair; email
uses its own bearer token. Both are immutable for the process lifetime.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field


def mask_secret(secret: str, visible: int = 4) -> str:
    """Return ``secret`` with all but the last ``visible`` characters hidden."""
    if len(secret) <= visible:
        return "*" * len(secret)
    return "*" * (len(secret) - visible) + secret[-visible:]


@dataclass(frozen=True)
class BasicCredentials:
    """Account identity/secret pair used for HTTP Basic authentication.

    Attributes:
        account_sid: Account identity, also part of some provider URLs.
        auth_token: Account secret.
    """

    account_sid: str
    auth_token: str = field(repr=False)

    def authorization_header(self) -> dict[str, str]:
        token = base64.b64encode(f"{self.account_sid}:{self.auth_token}".encode()).decode("ascii")
        return {"Authorization": f"Basic {token}"}


@dataclass(frozen=True)
class BearerCredentials:
    """API key sent as an ``Authorization: Bearer`` token."""

    api_key: str = field(repr=False)

    def authorization_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

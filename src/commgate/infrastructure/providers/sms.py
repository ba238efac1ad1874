"""SMS provider client."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import aiohttp

from commgate.core.domain.credentials import BasicCredentials
from commgate.core.domain.operations import OperationRequest, ProviderResponse
from commgate.infrastructure.providers.base import BaseProviderClient

API_VERSION = "2010-04-01"


class SmsClient(BaseProviderClient):
    """Send SMS through the account-scoped message resource.

    The account identity doubles as the URL scope, so the message endpoint
    is ``{api}/2010-04-01/Accounts/{account_sid}/Messages.json``.
    """

    provider_name = "sms"

    def __init__(
        self,
        base_url: str,
        credentials: BasicCredentials,
        *,
        connect_timeout: float = 10.0,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        super().__init__(
            base_url,
            credentials,
            connect_timeout=connect_timeout,
            session=session,
        )
        self._account_sid = credentials.account_sid

    async def create_message(self, fields: Mapping[str, Any]) -> ProviderResponse:
        """Send one SMS; ``fields`` are form-encoded verbatim (From, To, Body...)."""
        request = OperationRequest("create_sms", dict(fields))
        return await self._call(
            "POST",
            self._url(API_VERSION, "Accounts", self._account_sid, "Messages.json"),
            operation=request.operation,
            data=request.form_pairs(),
        )

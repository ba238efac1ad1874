"""Voice provider client."""

from __future__ import annotations

import aiohttp

from commgate.core.domain.credentials import BasicCredentials
from commgate.core.domain.operations import ProviderResponse, VoiceCall
from commgate.infrastructure.providers.base import BaseProviderClient


class VoiceClient(BaseProviderClient):
    """Place outgoing calls.

    The base URL is already versioned; calls are created at
    ``{voice}/Accounts/{account_sid}/Calls.json``.
    """

    provider_name = "voice"

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

    async def create_call(self, call: VoiceCall) -> ProviderResponse:
        request = call.to_request()
        return await self._call(
            "POST",
            self._url("Accounts", self._account_sid, "Calls.json"),
            operation=request.operation,
            data=request.form_pairs(),
        )

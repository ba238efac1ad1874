"""Transactional email provider client."""

from __future__ import annotations

import aiohttp

from commgate.core.domain.credentials import BearerCredentials
from commgate.core.domain.email import MailData
from commgate.core.domain.operations import ProviderResponse
from commgate.infrastructure.providers.base import BaseProviderClient


class EmailClient(BaseProviderClient):
    """Send mail as JSON with Bearer authentication.

    The provider answers ``202 Accepted`` with an empty body on success,
    which surfaces as a response without payload.
    """

    provider_name = "email"

    def __init__(
        self,
        base_url: str,
        credentials: BearerCredentials,
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

    async def send_mail(self, mail: MailData) -> ProviderResponse:
        self._logger.debug(
            "email.send",
            personalizations=len(mail.personalizations),
            recipients=mail.recipient_count,
            attachments=len(mail.attachments or ()),
        )
        return await self._call(
            "POST",
            self._url("send"),
            operation="send_mail",
            json=mail.to_payload(),
        )

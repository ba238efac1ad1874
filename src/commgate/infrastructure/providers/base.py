"""Shared HTTP plumbing for provider clients.

Every client owns one base URL, one credential set and one lazily created
``aiohttp.ClientSession`` that pools connections for the process lifetime.
Authentication is attached per request; nothing else is kept between calls.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any
from urllib.parse import quote

import aiohttp
import structlog

from commgate.core.domain.credentials import BasicCredentials, BearerCredentials
from commgate.core.domain.errors import (
    ProviderRejectedError,
    ProviderUnreachableError,
    ResponseMalformedError,
)
from commgate.core.domain.operations import ProviderResponse


def _is_success(status: int) -> bool:
    return 200 <= status < 300


def decode_lenient(body: bytes) -> Any:
    """Decode an error body as JSON when possible, otherwise as text."""
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        return body.decode("utf-8", errors="replace")


class BaseProviderClient:
    """Base client that wires authentication, pooling and response parsing.

    Subclasses set ``provider_name`` and build URLs with ``_url``.
    """

    provider_name = "provider"

    def __init__(
        self,
        base_url: str,
        credentials: BasicCredentials | BearerCredentials,
        *,
        connect_timeout: float = 10.0,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._credentials = credentials
        self._connect_timeout = connect_timeout
        self._session = session
        self._owns_session = session is None
        self._logger = structlog.get_logger().bind(provider=self.provider_name)

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            # total=None: upload duration is unbounded.
            timeout = aiohttp.ClientTimeout(total=None, sock_connect=self._connect_timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
            self._owns_session = True
        return self._session

    async def aclose(self) -> None:
        """Close the underlying HTTP session if this client created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    # ------------------------------------------------------------------
    # Request helpers
    # ------------------------------------------------------------------

    def _url(self, *segments: str, base: str | None = None) -> str:
        """Join quoted path segments onto the base URL."""
        path = "/".join(quote(str(segment), safe="") for segment in segments)
        return f"{base or self._base_url}/{path}"

    async def _send(
        self,
        method: str,
        url: str,
        *,
        operation: str,
        **kwargs: Any,
    ) -> tuple[int, bytes]:
        """Issue exactly one authenticated request and read the whole reply.

        Raises:
            ProviderUnreachableError: On connection failure or timeout.
        """
        session = await self._get_session()
        headers = {**kwargs.pop("headers", {}), **self._credentials.authorization_header()}
        try:
            async with session.request(method, url, headers=headers, **kwargs) as response:
                body = await response.read()
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            reason = str(exc) or type(exc).__name__
            self._logger.error(
                "provider.request.unreachable",
                operation=operation,
                method=method,
                error=reason,
            )
            raise ProviderUnreachableError(
                f"{self.provider_name} provider is unreachable: {reason}",
                provider=self.provider_name,
                details={"operation": operation},
            ) from exc

        self._logger.info(
            "provider.request.sent",
            operation=operation,
            method=method,
            status=status,
        )
        return status, body

    def _reject(self, operation: str, status: int, body: bytes) -> ProviderRejectedError:
        self._logger.warning(
            "provider.request.rejected",
            operation=operation,
            status=status,
        )
        return ProviderRejectedError(
            f"{self.provider_name} provider rejected {operation} with status {status}",
            provider=self.provider_name,
            provider_status=status,
            provider_response=decode_lenient(body),
            details={"operation": operation},
        )

    def _parse(self, operation: str, status: int, body: bytes) -> ProviderResponse:
        if not _is_success(status):
            raise self._reject(operation, status, body)
        if not body.strip():
            return ProviderResponse(status_code=status, payload=None)
        try:
            payload = json.loads(body)
        except ValueError as exc:
            self._logger.error(
                "provider.response.malformed",
                operation=operation,
                status=status,
                error=str(exc),
            )
            raise ResponseMalformedError(
                f"{self.provider_name} provider returned a body that is not valid JSON",
                provider=self.provider_name,
                details={"operation": operation, "provider_status": status},
            ) from exc
        return ProviderResponse(status_code=status, payload=payload)

    async def _call(
        self,
        method: str,
        url: str,
        *,
        operation: str,
        **kwargs: Any,
    ) -> ProviderResponse:
        """Send one request and parse its JSON reply."""
        status, body = await self._send(method, url, operation=operation, **kwargs)
        return self._parse(operation, status, body)

    async def _delete(self, url: str, *, operation: str) -> ProviderResponse:
        """Send a DELETE; the body is never parsed.

        A 404 counts as success so repeated deletes stay idempotent.
        """
        status, body = await self._send("DELETE", url, operation=operation)
        if _is_success(status) or status == 404:
            if status == 404:
                self._logger.info("provider.delete.already_absent", operation=operation)
            return ProviderResponse(status_code=status, payload=None)
        raise self._reject(operation, status, body)

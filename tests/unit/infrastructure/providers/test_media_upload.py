"""Tests for streaming media upload."""

from __future__ import annotations

import math
import os
from contextlib import asynccontextmanager

import aiofiles
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from commgate.core.domain.errors import (
    MediaSourceUnavailableError,
    ProviderRejectedError,
    ProviderUnreachableError,
)
from commgate.core.domain.media import MediaTransfer, TransferState, UploadMediaHandle
from commgate.infrastructure.providers import conversation as conversation_module
from commgate.infrastructure.providers.conversation import ConversationClient
from commgate.infrastructure.providers.media import open_media_source, read_chunks

MEDIA_ROUTE = "/mcs/v1/Services/{service}/Media"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def transitions(monkeypatch) -> list[tuple[TransferState, MediaTransfer]]:
    """Record every transfer state change made by the conversation client."""
    recorded: list[tuple[TransferState, MediaTransfer]] = []
    original = conversation_module.log_transition

    def spy(transfer, new_state):
        original(transfer, new_state)
        recorded.append((new_state, transfer))

    monkeypatch.setattr(conversation_module, "log_transition", spy)
    return recorded


@pytest.fixture
def opened_sources(monkeypatch) -> list:
    """Capture the file objects the client opens for upload."""
    sources: list = []
    original = conversation_module.open_media_source

    @asynccontextmanager
    async def spy(handle):
        async with original(handle) as source:
            sources.append(source)
            yield source

    monkeypatch.setattr(conversation_module, "open_media_source", spy)
    return sources


@pytest_asyncio.fixture
async def media_server():
    """Start a media endpoint backed by a single custom handler."""
    servers: list[TestServer] = []

    async def start(handler) -> str:
        app = web.Application()
        app.router.add_post(MEDIA_ROUTE, handler)
        server = TestServer(app)
        await server.start_server()
        servers.append(server)
        return str(server.make_url("/mcs/v1")).rstrip("/")

    yield start
    for server in servers:
        await server.close()


def _states(transitions) -> list[TransferState]:
    return [state for state, _ in transitions]


# ---------------------------------------------------------------------------
# Chunk reader
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_read_chunks_bounded(tmp_path):
    path = tmp_path / "payload.bin"
    path.write_bytes(os.urandom(10_000))
    transfer = MediaTransfer(handle=UploadMediaHandle(path=str(path)), service_sid="IS1")

    async with aiofiles.open(path, "rb") as source:
        chunks = [chunk async for chunk in read_chunks(source, 1024, transfer)]

    assert all(len(chunk) <= 1024 for chunk in chunks)
    assert b"".join(chunks) == path.read_bytes()
    assert transfer.chunks_sent == 10
    assert transfer.bytes_sent == 10_000
    assert transfer.state is TransferState.STREAMING


@pytest.mark.asyncio
async def test_open_missing_source(tmp_path):
    handle = UploadMediaHandle(path=str(tmp_path / "absent.png"))

    with pytest.raises(MediaSourceUnavailableError) as exc_info:
        async with open_media_source(handle):
            pass
    assert exc_info.value.details["path"] == handle.path


# ---------------------------------------------------------------------------
# Successful uploads
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_large_upload_streams_in_bounded_chunks(
    tmp_path, mock_provider, basic_credentials, monkeypatch, transitions, opened_sources
):
    size = 8 * 1024 * 1024 + 123
    chunk_size = 64 * 1024
    path = tmp_path / "video.mp4"
    with open(path, "wb") as f:
        os.truncate(f.fileno(), size)

    chunk_sizes: list[int] = []
    original_read_chunks = conversation_module.read_chunks

    async def spy_read_chunks(source, chunk_size, transfer=None):
        async for chunk in original_read_chunks(source, chunk_size, transfer):
            chunk_sizes.append(len(chunk))
            yield chunk

    monkeypatch.setattr(conversation_module, "read_chunks", spy_read_chunks)

    client = ConversationClient(
        mock_provider.conversations_url,
        mock_provider.media_url,
        basic_credentials,
        chunk_size=chunk_size,
    )
    try:
        response = await client.upload_media(UploadMediaHandle(path=str(path)), "IS1")
    finally:
        await client.aclose()

    assert response.payload["size"] == size
    assert response.payload["filename"] == "video.mp4"
    assert max(chunk_sizes) <= chunk_size
    assert sum(chunk_sizes) == size

    assert _states(transitions) == [TransferState.STREAMING, TransferState.COMPLETED]
    transfer = transitions[-1][1]
    assert transfer.chunks_sent == math.ceil(size / chunk_size)
    assert transfer.bytes_sent == size
    assert opened_sources[0].closed

    (request,) = mock_provider.requests
    assert request.path == "/mcs/v1/Services/IS1/Media"
    assert request.headers.get("Transfer-Encoding") == "chunked"
    assert request.upload["field"] == "file"
    assert request.upload["content_type"] == "video/mp4"
    assert len(request.upload["data"]) == size


@pytest.mark.asyncio
async def test_upload_uses_display_name(tmp_path, mock_provider, basic_credentials):
    path = tmp_path / "tmp-4821"
    path.write_bytes(b"hello")
    client = ConversationClient(mock_provider.conversations_url, mock_provider.media_url, basic_credentials)
    try:
        await client.upload_media(UploadMediaHandle(path=str(path), file_name="greeting.txt"), "IS1")
    finally:
        await client.aclose()

    (request,) = mock_provider.requests
    assert request.upload["filename"] == "greeting.txt"
    assert request.upload["content_type"] == "text/plain"


# ---------------------------------------------------------------------------
# Failed uploads
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_missing_file_makes_no_request(
    tmp_path, mock_provider, basic_credentials, transitions
):
    client = ConversationClient(mock_provider.conversations_url, mock_provider.media_url, basic_credentials)
    try:
        with pytest.raises(MediaSourceUnavailableError):
            await client.upload_media(UploadMediaHandle(path=str(tmp_path / "absent.png")), "IS1")
    finally:
        await client.aclose()

    assert mock_provider.requests == []
    assert _states(transitions) == [TransferState.FAILED]
    assert transitions[-1][1].error == "media_source_unavailable"


@pytest.mark.asyncio
async def test_connection_dropped_mid_stream(
    tmp_path, media_server, basic_credentials, transitions, opened_sources
):
    async def drop_after_first_bytes(request: web.Request) -> web.Response:
        await request.content.read(4096)
        request.transport.close()
        return web.Response(status=500)

    media_url = await media_server(drop_after_first_bytes)
    path = tmp_path / "big.bin"
    path.write_bytes(os.urandom(5 * 1024 * 1024))
    client = ConversationClient("http://unused.invalid/v1", media_url, basic_credentials, chunk_size=4096)
    try:
        with pytest.raises(ProviderUnreachableError) as exc_info:
            await client.upload_media(UploadMediaHandle(path=str(path)), "IS1")
    finally:
        await client.aclose()

    assert exc_info.value.code == "provider_unreachable"
    assert _states(transitions) == [TransferState.STREAMING, TransferState.FAILED]
    transfer = transitions[-1][1]
    assert transfer.state is TransferState.FAILED
    assert transfer.error == "provider_unreachable"
    assert transfer.chunks_sent >= 1
    assert opened_sources[0].closed


@pytest.mark.asyncio
async def test_provider_rejects_upload(
    tmp_path, media_server, basic_credentials, transitions, opened_sources
):
    async def unauthorized(request: web.Request) -> web.Response:
        return web.json_response({"code": 20003, "message": "Authenticate"}, status=401)

    media_url = await media_server(unauthorized)
    path = tmp_path / "photo.png"
    path.write_bytes(os.urandom(256 * 1024))
    client = ConversationClient("http://unused.invalid/v1", media_url, basic_credentials)
    try:
        with pytest.raises(ProviderRejectedError) as exc_info:
            await client.upload_media(UploadMediaHandle(path=str(path)), "IS1")
    finally:
        await client.aclose()

    assert exc_info.value.code == "provider_rejected"
    assert exc_info.value.provider_status == 401
    assert _states(transitions) == [TransferState.STREAMING, TransferState.FAILED]
    assert transitions[-1][1].error == "provider_rejected"
    assert opened_sources[0].closed

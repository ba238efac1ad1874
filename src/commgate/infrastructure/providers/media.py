"""Streaming building blocks for media uploads.

The local file is opened before any network I/O, read in bounded chunks by
an async generator, and handed to aiohttp as a streamed multipart part. The
transport pulls the next chunk only after the previous one was written, so
memory use does not depend on the file size.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import aiofiles
import aiohttp
import structlog

from commgate.core.domain.errors import MediaSourceUnavailableError
from commgate.core.domain.media import MediaTransfer, TransferState, UploadMediaHandle

logger = structlog.get_logger(__name__)

MULTIPART_FIELD = "file"


@asynccontextmanager
async def open_media_source(handle: UploadMediaHandle) -> AsyncIterator[Any]:
    """Open the upload source for binary reading.

    Raises:
        MediaSourceUnavailableError: If the file is missing, unreadable or
            not a regular file.
    """
    try:
        source = await aiofiles.open(handle.path, "rb")
    except OSError as exc:
        logger.warning(
            "media.source.unavailable",
            path=handle.path,
            error=type(exc).__name__,
        )
        raise MediaSourceUnavailableError(
            f"Cannot open media source '{handle.path}': {exc.strerror or exc}",
            path=handle.path,
            details={"reason": type(exc).__name__},
        ) from exc
    try:
        yield source
    finally:
        await source.close()


async def read_chunks(
    source: Any,
    chunk_size: int,
    transfer: MediaTransfer | None = None,
) -> AsyncIterator[bytes]:
    """Yield successive chunks of at most ``chunk_size`` bytes."""
    while True:
        chunk = await source.read(chunk_size)
        if not chunk:
            return
        if transfer is not None:
            transfer.record_chunk(len(chunk))
        yield chunk


def build_multipart_body(
    chunks: AsyncIterator[bytes],
    handle: UploadMediaHandle,
) -> aiohttp.MultipartWriter:
    """Wrap a chunk stream as the single ``file`` part of a form-data body."""
    writer = aiohttp.MultipartWriter("form-data")
    part = writer.append(chunks, {"Content-Type": handle.content_type})
    part.set_content_disposition("form-data", name=MULTIPART_FIELD, filename=handle.file_name)
    return writer


def log_transition(transfer: MediaTransfer, new_state: TransferState) -> None:
    """Move ``transfer`` to ``new_state`` and log the change."""
    previous = transfer.state
    transfer.transition(new_state)
    logger.info(
        "media.transfer.state",
        service_sid=transfer.service_sid,
        file_name=transfer.handle.file_name,
        previous=previous.value,
        state=new_state.value,
        bytes_sent=transfer.bytes_sent,
        chunks_sent=transfer.chunks_sent,
    )

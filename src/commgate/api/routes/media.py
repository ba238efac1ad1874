"""Media routes.

- ``POST /media/upload/{service_id}?file_path=...&file_name=...`` -- stream a local file
- ``GET  /media/retrieve/{service_id}/{media_id}`` -- fetch a media descriptor
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from commgate.api.dependencies import get_conversation_client
from commgate.api.errors import envelope_response
from commgate.api.schemas.errors import ErrorResponse
from commgate.application.response_normalizer import normalize_success
from commgate.core.domain.media import RemoteMediaHandle, UploadMediaHandle
from commgate.core.interfaces.providers import ConversationProviderProtocol

router = APIRouter(
    prefix="/media",
    responses={
        400: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)


@router.post("/upload/{service_id}")
async def upload_media(
    service_id: str,
    file_path: str = Query(..., min_length=1, description="Local path of the file to upload."),
    file_name: str | None = Query(
        default=None,
        description="Display filename; defaults to the base name of file_path.",
    ),
    conversation: ConversationProviderProtocol = Depends(get_conversation_client),
) -> Response:
    """Stream a local file into the service's media store.

    The file is read in bounded chunks; an unreadable path fails with 400
    before anything is sent to the provider.
    """
    handle = UploadMediaHandle(path=file_path, file_name=file_name or "")
    result = await conversation.upload_media(handle, service_id)
    return envelope_response(normalize_success(result))


@router.get("/retrieve/{service_id}/{media_id}")
async def retrieve_media(
    service_id: str,
    media_id: str,
    conversation: ConversationProviderProtocol = Depends(get_conversation_client),
) -> Response:
    """Return the media descriptor.

    Following the descriptor's content link to download the bytes is left
    to the caller.
    """
    result = await conversation.retrieve_media(
        RemoteMediaHandle(service_sid=service_id, media_sid=media_id)
    )
    return envelope_response(normalize_success(result))

"""Media handles and the upload transfer state machine."""

from __future__ import annotations

import mimetypes
import os
from dataclasses import dataclass, field
from enum import Enum

from commgate.core.domain.errors import ValidationError

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class UploadMediaHandle:
    """A local file to be streamed to the provider.

    Attributes:
        path: Local filesystem path; never empty.
        file_name: Display filename sent with the multipart part.
        content_type: MIME type of the part.
    """

    path: str
    file_name: str = ""
    content_type: str = ""

    def __post_init__(self) -> None:
        if not self.path or not self.path.strip():
            raise ValidationError("Media file path must not be empty", details={"field": "file_path"})
        if not self.file_name or not self.file_name.strip():
            object.__setattr__(self, "file_name", os.path.basename(self.path.rstrip("/\\")))
        if not self.content_type:
            guessed, _ = mimetypes.guess_type(self.file_name)
            object.__setattr__(self, "content_type", guessed or DEFAULT_CONTENT_TYPE)


@dataclass(frozen=True)
class RemoteMediaHandle:
    """A provider-hosted media object inside a service namespace."""

    service_sid: str
    media_sid: str


class TransferState(str, Enum):
    """Lifecycle of a single upload."""

    OPENED = "opened"
    STREAMING = "streaming"
    COMPLETED = "completed"
    FAILED = "failed"


_ALLOWED_TRANSITIONS: dict[TransferState, frozenset[TransferState]] = {
    TransferState.OPENED: frozenset({TransferState.STREAMING, TransferState.FAILED}),
    TransferState.STREAMING: frozenset({TransferState.COMPLETED, TransferState.FAILED}),
    TransferState.COMPLETED: frozenset(),
    TransferState.FAILED: frozenset(),
}


@dataclass
class MediaTransfer:
    """Progress of one upload.

    A failed transfer is terminal; there is no partial-result recovery and
    the caller restarts from the beginning.
    """

    handle: UploadMediaHandle
    service_sid: str
    state: TransferState = TransferState.OPENED
    bytes_sent: int = 0
    chunks_sent: int = 0
    error: str | None = field(default=None)

    def transition(self, new_state: TransferState) -> None:
        if new_state not in _ALLOWED_TRANSITIONS[self.state]:
            raise RuntimeError(
                f"Illegal transfer transition {self.state.value} -> {new_state.value}"
            )
        self.state = new_state

    def record_chunk(self, size: int) -> None:
        if self.state is TransferState.OPENED:
            self.transition(TransferState.STREAMING)
        self.bytes_sent += size
        self.chunks_sent += 1

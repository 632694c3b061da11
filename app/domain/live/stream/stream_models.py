"""Stream domain models."""

from datetime import datetime

from pydantic import BaseModel

from app.services.archive.archive_schemas import ArchiveReportResult
from app.services.signature.signature_schemas import VerificationOutcome

from .stream_state_machine import PlaybackMode, StreamState


class StreamStatusUpdate(BaseModel):
    """Fields written by a live or transcode status change."""

    channel_id: str
    live: bool | None = None
    url: str
    thumbnail: str | None = None


class StreamStatusResponse(BaseModel):
    """Stored stream status with its derived lifecycle state."""

    channel_id: str
    claim_id: str
    live: bool
    url: str
    type: str
    thumbnail: str
    archive: bool
    updated_at: datetime | None = None
    state: StreamState
    playback_mode: PlaybackMode
    transcode_location: str | None = None


__all__ = [
    "ArchiveReportResult",
    "StreamStatusResponse",
    "StreamStatusUpdate",
    "VerificationOutcome",
]

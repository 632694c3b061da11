from datetime import datetime, timezone

from pydantic import BaseModel, field_serializer

from app.domain.live.stream.stream_state_machine import PlaybackMode, StreamState


class StreamStatusOut(BaseModel):
    channel_id: str
    live: bool
    url: str
    type: str
    thumbnail: str
    archive: bool
    state: StreamState
    playback_mode: PlaybackMode
    transcode_location: str | None = None
    updated_at: datetime | None = None

    @field_serializer("updated_at")
    @classmethod
    def serialize_datetime(cls, v: datetime | None) -> str | None:
        """ISO 8601 in UTC; naive values from MongoDB are UTC."""
        if v is None:
            return None
        if v.tzinfo is None:
            v = v.replace(tzinfo=timezone.utc)
        return v.isoformat()

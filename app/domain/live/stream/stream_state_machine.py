"""Stream state machine describing channel lifecycle states."""

from enum import Enum

from app.schemas import StreamStatus

from .stream_urls import transcode_location_from_url


class StreamState(str, Enum):
    UNKNOWN = "UNKNOWN"
    OFFLINE = "OFFLINE"
    LIVE = "LIVE"


class PlaybackMode(str, Enum):
    DIRECT = "DIRECT"
    TRANSCODING = "TRANSCODING"


class StreamStateMachine:
    """Channel lifecycle states.

    State flow with triggers:
    - UNKNOWN (no record) -> LIVE | OFFLINE (first set_live_status creates the record)
    - OFFLINE -> LIVE (publish webhook)
    - LIVE -> OFFLINE (unpublish webhook)

    While LIVE the playback mode is DIRECT (raw ingest playlist) or
    TRANSCODING(location). Every live status change resets the mode to DIRECT;
    only set_transcode_status moves it to TRANSCODING.

    A record is never deleted, so nothing goes back to UNKNOWN. Every live status
    change is accepted as is (publish webhooks may be redelivered), so states
    are derived from stored records rather than guarded.
    """

    @classmethod
    def state_of(cls, record: StreamStatus | None) -> StreamState:
        """Derive the lifecycle state from a stored record."""
        if record is None:
            return StreamState.UNKNOWN
        return StreamState.LIVE if record.live else StreamState.OFFLINE

    @classmethod
    def playback_of(cls, record: StreamStatus, cdn_server: str) -> tuple[PlaybackMode, str | None]:
        """Derive the playback mode and transcode location from a stored record."""
        location = transcode_location_from_url(cdn_server, record.claim_id, record.url)
        if location is None:
            return PlaybackMode.DIRECT, None
        return PlaybackMode.TRANSCODING, location

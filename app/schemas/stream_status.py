"""Stream status ODM schema."""

from datetime import datetime
from typing import Any

from beanie import Document, Indexed
from pydantic import field_validator

HLS_CONTENT_TYPE = "application/x-mpegurl"


class StreamStatus(Document):
    """Live status of a single channel.

    `channel_id` is the lower-cased channel id and identifies the record.
    `claim_id` keeps the id as the edge server sent it.
    """

    channel_id: Indexed(str, unique=True)  # type: ignore[valid-type]
    claim_id: str

    live: bool = False
    url: str
    type: str = HLS_CONTENT_TYPE
    thumbnail: str

    # Set by operators outside this service
    archive: bool = False

    # Stamped by the MongoDB server on every write
    updated_at: datetime | None = None

    @field_validator("updated_at", mode="before")
    @classmethod
    def _parse_datetime(cls, v: Any) -> Any:
        """Accept Extended JSON `{"$date": ...}` values written by operator tooling."""
        if isinstance(v, dict) and "$date" in v:
            return datetime.fromisoformat(v["$date"].replace("Z", "+00:00"))
        return v

    @field_validator("archive", mode="before")
    @classmethod
    def _coerce_archive(cls, v: Any) -> bool:
        """Operators may store any truthy value in the flag."""
        return bool(v)

    class Settings:
        name = "stream_status"

"""Keyed access to stream status documents.

One document per channel, keyed by the lower-cased channel id. Writes are a
single `update_one` so a merge is never visible half-applied, and `updated_at`
comes from the MongoDB server clock. Only `upsert` creates records; `update`
leaves unknown channels alone.

Store errors and timeouts propagate to the caller; nothing here retries.
"""

import asyncio
from typing import Any

from loguru import logger

from app.app_config import get_app_environ_config
from app.schemas import StreamStatus


def normalize_channel_id(channel_id: str) -> str:
    return channel_id.lower()


class StreamStatusStore:
    """Status record store backed by the `stream_status` collection."""

    def __init__(self, timeout: float | None = None):
        if timeout is None:
            timeout = get_app_environ_config().STREAM_STORE_TIMEOUT_SECONDS
        self.timeout = timeout

    async def upsert(self, channel_id: str, fields: dict[str, Any]) -> None:
        """Merge `fields` into the channel's record, creating it if absent."""
        key = normalize_channel_id(channel_id)
        update = {
            "$set": fields,
            "$currentDate": {"updated_at": True},
        }
        if "archive" not in fields:
            # Never reset the operator's flag on an existing record
            update["$setOnInsert"] = {"archive": False}

        logger.debug(f"Upserting stream status {key}: {fields}")
        collection = StreamStatus.get_pymongo_collection()
        await asyncio.wait_for(
            collection.update_one({"channel_id": key}, update, upsert=True),
            timeout=self.timeout,
        )

    async def update(self, channel_id: str, fields: dict[str, Any]) -> bool:
        """Merge `fields` into an existing record only. Returns False when there is none."""
        key = normalize_channel_id(channel_id)

        logger.debug(f"Updating stream status {key}: {fields}")
        collection = StreamStatus.get_pymongo_collection()
        result = await asyncio.wait_for(
            collection.update_one(
                {"channel_id": key},
                {"$set": fields, "$currentDate": {"updated_at": True}},
            ),
            timeout=self.timeout,
        )
        return result.matched_count > 0

    async def get(self, channel_id: str) -> StreamStatus | None:
        """Return the channel's record, or None when the channel is unknown."""
        key = normalize_channel_id(channel_id)
        return await asyncio.wait_for(
            StreamStatus.find_one(StreamStatus.channel_id == key),
            timeout=self.timeout,
        )

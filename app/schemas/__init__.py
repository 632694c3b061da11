"""Beanie ODM schemas for MongoDB collections."""

from .init import init_beanie_odm
from .stream_status import HLS_CONTENT_TYPE, StreamStatus

__all__ = [
    "HLS_CONTENT_TYPE",
    "StreamStatus",
    "init_beanie_odm",
]

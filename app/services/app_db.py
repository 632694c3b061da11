"""Database client helpers for application services."""

from motor.motor_asyncio import AsyncIOMotorClient

from app.shared.storage.mongo import get_mongo_client

# MongoDB label for the stream status store
FLC_MONGO_LABEL = "flc_primary"


def get_flc_mongo_client() -> AsyncIOMotorClient:
    """Get MongoDB client for the stream status store.

    Returns:
        AsyncIOMotorClient configured by MONGO_URL_FLC_PRIMARY (or the default URL).
    """
    return get_mongo_client(FLC_MONGO_LABEL)

import asyncio

from fastapi import APIRouter
from loguru import logger

from app.services.app_db import get_flc_mongo_client

from .utils import ApiSuccess

router = APIRouter()

PING_TIMEOUT_SECONDS = 2


async def ping_store() -> bool:
    try:
        await asyncio.wait_for(get_flc_mongo_client().admin.command("ping"), timeout=PING_TIMEOUT_SECONDS)
    except Exception as e:
        logger.warning(f"Health check: status store ping failed: {e!r}")
        return False
    return True


@router.get("/health", response_model=ApiSuccess)
async def health():
    """Liveness plus status store reachability; always 200 so the process is not restarted on a store outage."""
    store_ok = await ping_store()
    return ApiSuccess(results={"status": "OK", "store": "ok" if store_ok else "unavailable"})

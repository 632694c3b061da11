"""Active streamer registry.

Other dispatch logic needs to know which channels are live. The lifecycle
service only notifies the registry (`add_streamer` / `remove_streamer`) and
never reads it.

Two backends:
- `InMemoryStreamerRegistry`: process-local set, the default.
- `RedisStreamerRegistry`: Redis set shared by every worker process.
"""

import threading
from typing import Protocol

from loguru import logger
from redis.asyncio import Redis

from app.app_config import get_app_environ_config
from app.shared.storage.redis import get_redis_client


class StreamerRegistry(Protocol):
    async def add_streamer(self, channel_id: str) -> None: ...

    async def remove_streamer(self, channel_id: str) -> None: ...


class InMemoryStreamerRegistry:
    """Thread-safe in-memory set of live channel ids."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._streamers: set[str] = set()

    async def add_streamer(self, channel_id: str) -> None:
        with self._lock:
            self._streamers.add(channel_id)

    async def remove_streamer(self, channel_id: str) -> None:
        with self._lock:
            self._streamers.discard(channel_id)

    def is_live(self, channel_id: str) -> bool:
        with self._lock:
            return channel_id in self._streamers

    def list_streamers(self) -> list[str]:
        with self._lock:
            return sorted(self._streamers)


class RedisStreamerRegistry:
    """Live channel ids kept in a Redis set (SADD/SREM are atomic)."""

    def __init__(self, redis_client: Redis, key: str) -> None:
        self._redis = redis_client
        self._key = key

    async def add_streamer(self, channel_id: str) -> None:
        await self._redis.sadd(self._key, channel_id)  # type: ignore[misc]

    async def remove_streamer(self, channel_id: str) -> None:
        await self._redis.srem(self._key, channel_id)  # type: ignore[misc]

    async def list_streamers(self) -> list[str]:
        members = await self._redis.smembers(self._key)  # type: ignore[misc]
        return sorted(m.decode("utf-8") if isinstance(m, bytes) else m for m in members)


_registry: StreamerRegistry | None = None


def get_streamer_registry() -> StreamerRegistry:
    """Get the process-wide registry selected by STREAMER_REGISTRY_BACKEND."""
    global _registry
    if _registry is None:
        config = get_app_environ_config()
        if config.STREAMER_REGISTRY_BACKEND == "redis":
            logger.info(f"Using Redis streamer registry: key={config.STREAMER_REGISTRY_KEY}")
            _registry = RedisStreamerRegistry(
                get_redis_client(config.STREAMER_REGISTRY_REDIS_LABEL),
                config.STREAMER_REGISTRY_KEY,
            )
        else:
            logger.info("Using in-memory streamer registry")
            _registry = InMemoryStreamerRegistry()
    return _registry

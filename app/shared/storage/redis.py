"""
Simple Redis client manager that creates and tracks clients.
"""

import asyncio
import threading
from typing import Dict

from loguru import logger
from redis.asyncio import Redis

from ..config import config
from .mongo import MongoManager


class RedisManager:
    """
    Simple Redis client manager.

    Features:
    - Creates and tracks Redis clients per label
    - Loads connection strings from REDIS_URL_<LABEL> settings
    - Supports both standalone and cluster modes (`?mode=cluster`)
    - Thread-safe singleton pattern
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        """Singleton pattern: only one instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if hasattr(self, "_initialized"):
            return

        self._clients: Dict[str, Redis] = {}
        self._connection_strings: Dict[str, str] = {}
        self._lock = threading.Lock()

        self._load_connection_strings()

        self._initialized = True

    def _load_connection_strings(self):
        """Load Redis connection strings from centralized configuration."""
        for key, value in config.items():
            if not key.startswith("REDIS_URL_") or not value:
                continue
            label = key[10:].lower()
            self._connection_strings[label] = value
            logger.info(
                "Loaded Redis connection string for label '{}': {}",
                label,
                MongoManager.hide_password(value),
            )

        if "default" not in self._connection_strings:
            default_url = config.get_redis_url("default")
            self._connection_strings["default"] = default_url
            logger.info(
                "Using default Redis connection string: {}", MongoManager.hide_password(default_url)
            )

    @staticmethod
    def _split_mode(connection_string: str) -> tuple[str, str]:
        """
        Extract mode (cluster|standalone) and strip it from the connection string.

        Returns:
            Tuple of (clean connection string, mode)
        """
        if "?" not in connection_string:
            return connection_string, "standalone"

        base_url, query_part = connection_string.split("?", 1)
        mode = "standalone"
        clean_params = []
        for param in query_part.split("&"):
            if param.startswith("mode="):
                if param[5:] in ("cluster", "standalone"):
                    mode = param[5:]
                continue
            clean_params.append(param)

        if clean_params:
            return f"{base_url}?{'&'.join(clean_params)}", mode
        return base_url, mode

    def get_client(self, label: str | None = None) -> Redis:
        """
        Get Redis client by label.

        Raises:
            ValueError: If label not found
        """
        if label is None:
            label = "default"

        with self._lock:
            if label not in self._clients:
                if label not in self._connection_strings:
                    raise ValueError(f"No Redis connection string found for label '{label}'")

                clean_url, mode = self._split_mode(self._connection_strings[label])
                logger.info("Open Redis client for label '{}' (mode: {})", label, mode)

                if mode == "cluster":
                    from redis.asyncio.cluster import RedisCluster

                    self._clients[label] = RedisCluster.from_url(clean_url)
                else:
                    self._clients[label] = Redis.from_url(clean_url)

            return self._clients[label]

    async def close_all(self):
        """Close all clients."""
        with self._lock:
            clients = list(self._clients.items())
            self._clients.clear()

        for label, client in clients:
            try:
                await asyncio.wait_for(client.aclose(), timeout=2.0)
                logger.info("Closed Redis client '{}'", label)
            except asyncio.TimeoutError:
                logger.warning("Timeout closing Redis client '{}'", label)


def get_redis_manager() -> RedisManager:
    """Get global RedisManager instance."""
    return RedisManager()


def get_redis_client(label: str | None = None) -> Redis:
    """Get Redis client by label."""
    return get_redis_manager().get_client(label)

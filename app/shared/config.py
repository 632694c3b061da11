"""
Centralized configuration management.

Settings are read from, in increasing priority:
1) `env.example` (committed, safe placeholders)
2) `env.local` (optional, MUST NOT be committed)
3) System environment variables
"""

import os
from pathlib import Path

from dotenv import dotenv_values
from loguru import logger


class EnvironConfig:
    """
    Singleton configuration class that loads environment variables from env files
    and system environment, providing dictionary-like access with default values.
    """

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(EnvironConfig, cls).__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._config = {}
            self._load_config()
            EnvironConfig._initialized = True

    def _load_config(self):
        """
        Load configuration from env files and system environment.

        Priority order (later overrides earlier):
        1. env.example (committed placeholders)
        2. env.local (developer-local, not committed)
        3. System environment variables (highest priority)
        """
        root = Path(__file__).parent.parent.parent

        example_path = root / "env.example"
        if example_path.exists():
            self._config.update(dotenv_values(example_path))
            logger.info("Loaded environment variables from {}", example_path)

        local_path = root / "env.local"
        if local_path.exists():
            self._config.update(dotenv_values(local_path))
            logger.info("Loaded and overrode environment variables from {}", local_path)

        self._config.update(os.environ)

    def get(self, key, default=None):
        return self._config.get(key, default)

    def items(self):
        return self._config.items()

    def get_redis_url(self, label: str = "default") -> str:
        """
        Get Redis connection URL for a specific label.

        Args:
            label: Redis connection label (default: "default")

        Returns:
            str: Redis connection URL
        """
        if label == "default":
            # REDIS_URL_DEFAULT first, then REDIS_URL, then fallback
            return self.get("REDIS_URL_DEFAULT") or self.get("REDIS_URL") or "redis://localhost:6379"
        return self.get(f"REDIS_URL_{label.upper()}") or ""

    def get_mongo_url(self, label: str = "default") -> str:
        """
        Get MongoDB connection URL for a specific label.

        Args:
            label: MongoDB connection label (default: "default")

        Returns:
            str: MongoDB connection URL
        """
        if label == "default":
            # MONGO_URL_DEFAULT first, then MONGO_URL, then fallback
            return (
                self.get("MONGO_URL_DEFAULT")
                or self.get("MONGO_URL")
                or "mongodb://localhost:27017/stream_lifecycle"
            )
        return self.get(f"MONGO_URL_{label.upper()}") or ""

    def get_mongo_max_pool_size(self) -> int:
        """
        Get MongoDB maximum pool size from configuration.

        Returns:
            int: Maximum pool size (1-100, default: 5)
        """
        try:
            size = int(self.get("MONGO_MAX_POOL_SIZE", "5"))
            if 1 <= size <= 100:
                return size
            logger.warning("MONGO_MAX_POOL_SIZE value {} is out of range (1-100), defaulting to 5", size)
            return 5
        except (ValueError, TypeError):
            logger.warning(
                "Invalid MONGO_MAX_POOL_SIZE value '{}', defaulting to 5", self.get("MONGO_MAX_POOL_SIZE")
            )
            return 5

    def _get_positive_ms(self, key: str, default: int) -> int:
        try:
            timeout = int(self.get(key, str(default)))
            if timeout > 0:
                return timeout
            logger.warning("{} value {} must be positive, defaulting to {}", key, timeout, default)
            return default
        except (ValueError, TypeError):
            logger.warning("Invalid {} value '{}', defaulting to {}", key, self.get(key), default)
            return default

    def get_mongo_server_selection_timeout(self) -> int:
        """Server selection timeout in milliseconds (default: 30000)."""
        return self._get_positive_ms("MONGO_SERVER_SELECTION_TIMEOUT", 30000)

    def get_mongo_connect_timeout(self) -> int:
        """Connection timeout in milliseconds (default: 30000)."""
        return self._get_positive_ms("MONGO_CONNECT_TIMEOUT", 30000)

    def get_mongo_socket_timeout(self) -> int:
        """Socket timeout in milliseconds (default: 300000)."""
        return self._get_positive_ms("MONGO_SOCKET_TIMEOUT", 300000)


# Global configuration instance
config = EnvironConfig()

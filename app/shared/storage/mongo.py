"""
Simple MongoDB client manager that creates and tracks clients.
"""

import atexit
import threading
from typing import Dict

from loguru import logger
from motor.motor_asyncio import AsyncIOMotorClient

from ..config import config


class MongoManager:
    """
    Simple MongoDB client manager.

    Features:
    - Creates and tracks MongoDB clients per label
    - Loads connection strings from MONGO_URL_<LABEL> settings
    - Configurable connection pool size and timeouts
    - Ensures all clients are closed on process exit
    - Thread-safe singleton pattern

    Environment Variables Priority (highest to lowest):
    1. MONGO_URL_DEFAULT - Explicit default connection string
    2. MONGO_URL - System default connection string
    3. Hardcoded fallback - mongodb://localhost:27017/stream_lifecycle
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

        self._clients: Dict[str, AsyncIOMotorClient] = {}
        self._connection_strings: Dict[str, str] = {}
        self._lock = threading.Lock()

        self._load_connection_strings()

        self._max_pool_size = config.get_mongo_max_pool_size()
        self._server_selection_timeout = config.get_mongo_server_selection_timeout()
        self._connect_timeout = config.get_mongo_connect_timeout()
        self._socket_timeout = config.get_mongo_socket_timeout()
        logger.info(
            "Loaded MongoDB parameters: pool={} server_selection={}ms connect={}ms socket={}ms",
            self._max_pool_size,
            self._server_selection_timeout,
            self._connect_timeout,
            self._socket_timeout,
        )

        atexit.register(self.close_all)

        self._initialized = True

    @staticmethod
    def _get_label_from_env_var(env_var: str) -> str | None:
        if env_var.startswith("MONGO_URL_"):
            return env_var[10:].lower()
        return None

    def _load_connection_strings(self):
        """Load MongoDB connection strings from centralized configuration."""
        for key, value in config.items():
            label = self._get_label_from_env_var(key)
            if label is None or not value:
                continue
            self._connection_strings[label] = value
            logger.info(
                "Loaded MongoDB connection string for label '{}': {}",
                label,
                self.hide_password(value),
            )

        if "default" not in self._connection_strings:
            self._connection_strings["default"] = config.get_mongo_url("default")

        logger.info(
            "Using default MongoDB connection string: {}",
            self.hide_password(self._connection_strings["default"]),
        )

    @staticmethod
    def hide_password(connection_string: str) -> str:
        """
        Hide password in MongoDB connection string for logging.

        Args:
            connection_string: Original connection string

        Returns:
            Connection string with password replaced by asterisks
        """
        if "://" not in connection_string or "@" not in connection_string:
            return connection_string

        protocol_part, rest = connection_string.split("://", 1)
        last_at_index = rest.rfind("@")
        auth_part, host_part = rest[:last_at_index], rest[last_at_index + 1 :]
        if ":" not in auth_part:
            return connection_string

        username, password = auth_part.split(":", 1)
        if not username or not password:
            return connection_string
        return f"{protocol_part}://{username}:***@{host_part}"

    def get_client(self, label: str | None = None) -> AsyncIOMotorClient:
        """
        Get MongoDB client by label.

        Args:
            label: Client label (defaults to 'default')

        Returns:
            AsyncIOMotorClient instance

        Raises:
            ValueError: If label not found
        """
        if label is None:
            label = "default"

        with self._lock:
            if label not in self._clients:
                connection_string = self._connection_strings.get(label)
                if not connection_string:
                    # Labels without their own URL share the default server
                    connection_string = self._connection_strings.get("default")
                if not connection_string:
                    raise ValueError(f"No MongoDB connection string found for label '{label}'")

                logger.info("Open MongoDB client for label '{}'", label)
                self._clients[label] = AsyncIOMotorClient(
                    connection_string,
                    serverSelectionTimeoutMS=self._server_selection_timeout,
                    connectTimeoutMS=self._connect_timeout,
                    socketTimeoutMS=self._socket_timeout,
                    maxPoolSize=self._max_pool_size,
                )

            return self._clients[label]

    def close_client(self, label: str):
        """Close specific client."""
        with self._lock:
            client = self._clients.pop(label, None)
        if client is not None:
            client.close()
            logger.info("Closed MongoDB client for label '{}'", label)

    def close_all(self):
        """Close all clients."""
        with self._lock:
            client_labels = list(self._clients.keys())

        for label in client_labels:
            self.close_client(label)


_mongo_manager = None


def get_mongo_manager() -> MongoManager:
    """Get the global MongoDB manager instance."""
    global _mongo_manager
    if _mongo_manager is None:
        _mongo_manager = MongoManager()
    return _mongo_manager


def get_mongo_client(label: str | None = None) -> AsyncIOMotorClient:
    """Get MongoDB client by label."""
    return get_mongo_manager().get_client(label)

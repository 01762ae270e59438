# SPDX-License-Identifier: MIT
# Copyright (c) 2025 mongo-store contributors

"""Connection handling and MongoStore construction."""

import logging
from typing import Any, Callable

from .config import MongoStoreConfig
from .mongo_store import MongoStore
from .store import StoreConnectionError

logger = logging.getLogger(__name__)


class MongoStoreFactory:
    """Owns a MongoDB client and hands out stores bound to its collections."""

    def __init__(
        self,
        config: MongoStoreConfig,
        id_factory: Callable[[Any], Any] | None = None,
    ):
        self.config = config
        self.id_factory = id_factory
        self.client = None
        self.database = None

    def connect(self) -> None:
        """Connect to MongoDB and verify the connection with ``ping``.

        Raises:
            StoreConnectionError: If connection fails
        """
        try:
            from pymongo import MongoClient
            from pymongo.errors import ConnectionFailure
        except ImportError as e:
            logger.error("MongoStoreFactory: pymongo not installed")
            raise StoreConnectionError("pymongo not installed") from e

        config = self.config
        try:
            connection_params: dict[str, Any] = {
                "host": config.host,
                "port": config.port,
            }

            if config.username and config.password:
                connection_params["username"] = config.username
                connection_params["password"] = config.password
                if "authSource" not in config.client_options:
                    connection_params["authSource"] = "admin"

            connection_params.update(config.client_options)

            self.client = MongoClient(**connection_params)
            self.client.admin.command("ping")
            self.database = self.client[config.database]

            logger.info("MongoStoreFactory: connected to %s:%s/%s", config.host, config.port, config.database)

        except ConnectionFailure as e:
            logger.error("MongoStoreFactory: connection failed - %s", e, exc_info=True)
            self._close_client()
            raise StoreConnectionError(f"Failed to connect to MongoDB at {config.host}:{config.port}") from e
        except Exception as e:
            logger.error("MongoStoreFactory: unexpected error during connect - %s", e, exc_info=True)
            self._close_client()
            raise StoreConnectionError(f"Unexpected error connecting to MongoDB: {str(e)}") from e

    def _close_client(self) -> None:
        if self.client is not None:
            self.client.close()
        self.client = None
        self.database = None

    def disconnect(self) -> None:
        """Disconnect from MongoDB."""
        if self.client is not None:
            self._close_client()
            logger.info("MongoStoreFactory: disconnected")

    def store(self, collection: str) -> MongoStore:
        """Return a MongoStore bound to ``collection``.

        Raises:
            StoreConnectionError: If not connected
        """
        if self.database is None:
            raise StoreConnectionError("Not connected to MongoDB")
        return MongoStore(
            self.database[collection],
            options=self.config.to_store_options(),
            id_factory=self.id_factory,
        )

    def __enter__(self) -> "MongoStoreFactory":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disconnect()


def create_mongo_store(config: MongoStoreConfig, collection: str) -> MongoStore:
    """Connect with ``config`` and return a store for ``collection``.

    The client stays open for the lifetime of the process; use
    ``MongoStoreFactory`` directly when the connection must be closed.
    """
    factory = MongoStoreFactory(config)
    factory.connect()
    return factory.store(collection)

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 mongo-store contributors

"""Configuration for MongoDB-backed stores."""

import os
from dataclasses import dataclass, field
from typing import Any


@dataclass
class MongoStoreConfig:
    """Connection and per-operation settings for a MongoStore.

    Attributes:
        host: MongoDB host
        port: MongoDB port
        database: Database name
        username: MongoDB username (optional)
        password: MongoDB password (optional)
        client_options: Extra ``MongoClient`` keyword arguments
        store_options: Per-operation driver options keyed by operation name
    """
    host: str | None = "localhost"
    port: int | None = 27017
    database: str | None = "mongo_store"
    username: str | None = None
    password: str | None = None
    client_options: dict[str, Any] = field(default_factory=dict)
    store_options: dict[str, dict[str, Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.host:
            raise ValueError(
                "MongoDB host is required. "
                "Provide the MongoDB server hostname or IP address."
            )
        if self.port is None:
            raise ValueError(
                "MongoDB port is required. "
                "Provide the MongoDB server port number."
            )
        if not self.database:
            raise ValueError(
                "MongoDB database is required. "
                "Provide the database name to use."
            )

    @classmethod
    def from_env(cls, **overrides: Any) -> "MongoStoreConfig":
        """Build a config from explicit values with environment variable fallback.

        Explicit keyword arguments take precedence over the environment:

        - ``MONGO_STORE_HOST`` (default ``localhost``)
        - ``MONGO_STORE_PORT`` (default ``27017``)
        - ``MONGO_STORE_DATABASE`` (default ``mongo_store``)
        - ``MONGO_STORE_USERNAME`` and ``MONGO_STORE_PASSWORD`` (only if set)

        Args:
            **overrides: Any ``MongoStoreConfig`` field

        Returns:
            Resolved configuration

        Raises:
            ValueError: If the port is not an integer or a required value is empty
        """
        kwargs: dict[str, Any] = {}

        if "host" in overrides:
            kwargs["host"] = overrides.pop("host")
        else:
            kwargs["host"] = os.getenv("MONGO_STORE_HOST", "localhost")

        if "port" in overrides:
            kwargs["port"] = overrides.pop("port")
        else:
            port = os.getenv("MONGO_STORE_PORT", "27017")
            try:
                kwargs["port"] = int(port)
            except ValueError as e:
                raise ValueError(f"MONGO_STORE_PORT must be an integer, got {port!r}") from e

        if "database" in overrides:
            kwargs["database"] = overrides.pop("database")
        else:
            kwargs["database"] = os.getenv("MONGO_STORE_DATABASE", "mongo_store")

        for key, env_var in (("username", "MONGO_STORE_USERNAME"), ("password", "MONGO_STORE_PASSWORD")):
            if key in overrides:
                kwargs[key] = overrides.pop(key)
            else:
                value = os.getenv(env_var)
                if value is not None:
                    kwargs[key] = value

        kwargs.update(overrides)
        return cls(**kwargs)

    def to_store_options(self) -> dict[str, Any]:
        """Return the options structure accepted by ``MongoStore``."""
        return {
            "mongo": {"database": self.database},
            "store": {name: dict(opts) for name, opts in self.store_options.items()},
        }

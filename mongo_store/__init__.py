# SPDX-License-Identifier: MIT
# Copyright (c) 2025 mongo-store contributors

"""MongoDB CRUD Store Adapter.

A thin store adapter exposing create/remove/update/find/replace operations
over a MongoDB collection with stable, driver-independent result shapes.
"""

__version__ = "0.1.0"

from .config import MongoStoreConfig
from .factory import MongoStoreFactory, create_mongo_store
from .mongo_store import MongoStore
from .service import MongoStoreService
from .store import (
    STORE_METHODS,
    InvalidRequestError,
    Store,
    StoreConnectionError,
    StoreError,
    StoreOptions,
)

__all__ = [
    # Version
    "__version__",
    # Stores
    "Store",
    "MongoStore",
    "StoreOptions",
    "STORE_METHODS",
    # Configuration and wiring
    "MongoStoreConfig",
    "MongoStoreFactory",
    "MongoStoreService",
    "create_mongo_store",
    # Exceptions
    "StoreError",
    "InvalidRequestError",
    "StoreConnectionError",
]

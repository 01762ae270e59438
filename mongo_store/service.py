# SPDX-License-Identifier: MIT
# Copyright (c) 2025 mongo-store contributors

"""Action service that routes request patterns to collection stores.

A host framework hands each inbound pattern to ``MongoStoreService.act``.
Patterns look like::

    {"cmd": "findById", "collection": "users", "id": "5f1d..."}
    {"cmd": "find", "collection": "users", "query": {...}, "options": {"limit": 10}}

Query and data payloads may use MongoDB Extended JSON (``{"$oid": ...}``,
``{"$date": ...}``); results are returned as relaxed Extended JSON so they can
be serialized by any JSON transport.
"""

import json
import logging
from typing import Any, Mapping

from bson import json_util

from .factory import MongoStoreFactory
from .store import STORE_METHODS, InvalidRequestError

logger = logging.getLogger(__name__)


def decode_ejson(value: Any) -> Any:
    """Convert Extended JSON markers in ``value`` to BSON types."""
    if value is None:
        return None
    return json_util.loads(json_util.dumps(value))


def encode_ejson(value: Any) -> Any:
    """Convert BSON types in ``value`` to relaxed Extended JSON values."""
    return json.loads(json_util.dumps(value, json_options=json_util.RELAXED_JSON_OPTIONS))


class MongoStoreService:
    """Dispatches store actions against collections of one database."""

    def __init__(self, factory: MongoStoreFactory, ejson: bool = True):
        self.factory = factory
        self.ejson = ejson

    def act(self, pattern: Mapping[str, Any]) -> Any:
        """Run the store operation described by ``pattern``.

        Args:
            pattern: Mapping with ``cmd`` (an operation name), ``collection``
                     and the request fields ``query``, ``id``, ``data``; ``find``
                     reads its find options from ``options``

        Returns:
            The store's normalized result

        Raises:
            InvalidRequestError: If ``cmd`` or ``collection`` is missing or invalid
        """
        cmd = pattern.get("cmd")
        if cmd not in STORE_METHODS:
            raise InvalidRequestError(f"Unknown store operation: {cmd}")

        collection = pattern.get("collection")
        if not isinstance(collection, str) or not collection:
            raise InvalidRequestError("A collection name is required")

        request = dict(pattern)
        if self.ejson:
            for key in ("query", "data"):
                if key in request:
                    request[key] = decode_ejson(request[key])

        logger.debug("MongoStoreService: %s on %s", cmd, collection)
        store = self.factory.store(collection)
        result = store.dispatch(cmd, request, pattern.get("options"))

        if self.ejson:
            return encode_ejson(result)
        return result

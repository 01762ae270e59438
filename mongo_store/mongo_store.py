# SPDX-License-Identifier: MIT
# Copyright (c) 2025 mongo-store contributors

"""MongoDB CRUD store implementation."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Dict, List, Optional

from .store import InvalidRequestError, Store, StoreOptions

logger = logging.getLogger(__name__)


def _default_id_factory(value: Any) -> Any:
    from bson import ObjectId

    return ObjectId(value)


def _sort_spec(order_by: Any) -> Any:
    """Convert a ``{field: direction}`` mapping to the list form the cursor expects."""
    if isinstance(order_by, Mapping):
        return list(order_by.items())
    return order_by


def _copy_record(record: Any) -> Any:
    # The driver writes the generated _id back into inserted documents
    if isinstance(record, Mapping):
        return dict(record)
    return record


class MongoStore(Store):
    """CRUD store over a single MongoDB collection.

    Every operation issues exactly one driver call and reshapes the driver's
    response into a plain dictionary. Errors raised by the driver are not
    caught or wrapped.
    """

    def __init__(
        self,
        collection: Any,
        options: Optional[Mapping[str, Any]] = None,
        id_factory: Optional[Callable[[Any], Any]] = None,
    ):
        """Initialize the store.

        Args:
            collection: Driver collection handle (``pymongo.collection.Collection``)
            options: ``{"mongo": {...}, "store": {<operation>: {...}}}``; per-operation
                     values are passed to the driver as keyword arguments
            id_factory: Converts a request ``id`` to the driver's identifier type.
                        Defaults to ``bson.ObjectId``.
        """
        self.collection = collection
        self.options = StoreOptions(options, driver_key="mongo")
        self.id_factory = id_factory or _default_id_factory

    def _id_filter(self, request: Mapping[str, Any]) -> Dict[str, Any]:
        return {"_id": self.id_factory(request.get("id"))}

    @staticmethod
    def _data(request: Mapping[str, Any], data: Any) -> Any:
        return request.get("data") if data is None else data

    def create(self, request: Mapping[str, Any]) -> Dict[str, Any]:
        """Insert one record or a sequence of records.

        Args:
            request: Request whose ``data`` is a mapping or a sequence of mappings

        Returns:
            ``{"ids": [...]}`` for a sequence, ``{"id": ...}`` for a single record;
            identifiers are returned as strings

        Raises:
            InvalidRequestError: If ``data`` is neither a mapping nor a sequence
        """
        data = request.get("data")
        options = self.options.for_operation("create")

        if isinstance(data, Mapping):
            resp = self.collection.insert_one(_copy_record(data), **options)
            logger.debug("MongoStore: inserted document %s", resp.inserted_id)
            return {"id": str(resp.inserted_id)}

        if isinstance(data, Sequence) and not isinstance(data, (str, bytes, bytearray)):
            resp = self.collection.insert_many([_copy_record(d) for d in data], **options)
            ids = [str(i) for i in resp.inserted_ids]
            logger.debug("MongoStore: inserted %d documents", len(ids))
            return {"ids": ids}

        raise InvalidRequestError(
            f"create requires a record or a sequence of records, got {type(data).__name__}"
        )

    def remove(self, request: Mapping[str, Any]) -> Dict[str, Any]:
        """Delete all records matching the query.

        Returns:
            ``{"deletedCount": n}``
        """
        resp = self.collection.delete_many(
            request.get("query"), **self.options.for_operation("remove")
        )
        logger.debug("MongoStore: deleted %s documents", resp.deleted_count)
        return {"deletedCount": resp.deleted_count}

    def remove_by_id(self, request: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """Delete a record by identifier and return it, or None if nothing matched."""
        return self.collection.find_one_and_delete(
            self._id_filter(request), **self.options.for_operation("removeById")
        )

    def update(self, request: Mapping[str, Any], data: Any = None) -> Optional[Dict[str, Any]]:
        """Apply ``data`` to the first record matching the query.

        Args:
            request: Request with ``query`` (and ``data`` when not passed explicitly)
            data: Update document, e.g. ``{"$set": {...}}``

        Returns:
            The record as returned by the driver, or None if nothing matched
        """
        return self.collection.find_one_and_update(
            request.get("query"),
            self._data(request, data),
            **self.options.for_operation("update"),
        )

    def update_by_id(self, request: Mapping[str, Any], data: Any = None) -> Optional[Dict[str, Any]]:
        return self.collection.find_one_and_update(
            self._id_filter(request),
            self._data(request, data),
            **self.options.for_operation("updateById"),
        )

    def find(
        self, request: Mapping[str, Any], options: Optional[Mapping[str, Any]] = None
    ) -> Dict[str, Any]:
        """Find records matching the query.

        Find options are applied only when present and truthy, in the order
        ``limit``, ``offset``, ``fields``, ``orderBy``. The projection
        (``fields``) is handed to the driver's ``find`` call since pymongo
        cursors take it at creation time.

        Args:
            request: Request with ``query``
            options: Optional ``limit``, ``offset``, ``fields`` and ``orderBy``

        Returns:
            ``{"result": [...]}`` merged with the given find options
        """
        options = dict(options or {})
        find_options = self.options.for_operation("find")
        if options.get("fields"):
            find_options["projection"] = options["fields"]

        cursor = self.collection.find(request.get("query"), **find_options)
        if options.get("limit"):
            cursor = cursor.limit(options["limit"])
        if options.get("offset"):
            cursor = cursor.skip(options["offset"])
        if options.get("orderBy"):
            cursor = cursor.sort(_sort_spec(options["orderBy"]))

        records: List[Dict[str, Any]] = list(cursor)
        logger.debug("MongoStore: find returned %d documents", len(records))

        result: Dict[str, Any] = {"result": records}
        result.update(options)
        return result

    def find_by_id(self, request: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        return self.collection.find_one(
            self._id_filter(request), **self.options.for_operation("findById")
        )

    def replace(self, request: Mapping[str, Any], data: Any = None) -> Dict[str, Any]:
        """Update all records matching the query, inserting one if none match.

        ``upsert`` is always forced on for this call; the stored options are
        left untouched.

        Returns:
            ``matchedCount``, ``modifiedCount``, ``upsertedCount`` and ``upsertedId``
        """
        resp = self.collection.update_many(
            request.get("query"),
            self._data(request, data),
            **self.options.for_operation("replace", upsert=True),
        )
        upserted_id = resp.upserted_id
        return {
            "matchedCount": resp.matched_count,
            "modifiedCount": resp.modified_count,
            "upsertedCount": 0 if upserted_id is None else 1,
            "upsertedId": None if upserted_id is None else str(upserted_id),
        }

    def replace_by_id(self, request: Mapping[str, Any], data: Any = None) -> Optional[Dict[str, Any]]:
        return self.collection.find_one_and_replace(
            self._id_filter(request),
            self._data(request, data),
            **self.options.for_operation("replaceById"),
        )

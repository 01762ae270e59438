# SPDX-License-Identifier: MIT
# Copyright (c) 2025 mongo-store contributors

"""Abstract store interface shared by CRUD adapters."""

import copy
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional

STORE_METHODS = (
    "create",
    "remove",
    "removeById",
    "update",
    "updateById",
    "find",
    "findById",
    "replace",
    "replaceById",
)

# Wire operation name -> Python method name
_METHOD_NAMES = {
    "create": "create",
    "remove": "remove",
    "removeById": "remove_by_id",
    "update": "update",
    "updateById": "update_by_id",
    "find": "find",
    "findById": "find_by_id",
    "replace": "replace",
    "replaceById": "replace_by_id",
}


class StoreError(Exception):
    """Base exception for store errors."""
    pass


class InvalidRequestError(StoreError):
    """Exception raised when a request does not have a usable shape."""
    pass


class StoreConnectionError(StoreError):
    """Exception raised when connection to the backing database fails."""
    pass


class StoreOptions:
    """Resolved adapter options.

    Holds a ``driver`` namespace (e.g. ``"mongo"``) and a ``store`` namespace
    keyed by operation name. Every operation in ``STORE_METHODS`` is present
    in ``store`` after construction. Caller mappings are deep-copied, and
    per-operation lookups hand out fresh copies, so the resolved options are
    never mutated after construction.
    """

    def __init__(self, options: Optional[Mapping[str, Any]] = None, driver_key: str = "mongo"):
        options = copy.deepcopy(dict(options or {}))

        self.driver_key = driver_key
        self.driver: Dict[str, Any] = dict(options.pop(driver_key, None) or {})
        store = dict(options.pop("store", None) or {})
        for method in STORE_METHODS:
            if store.get(method) is None:
                store[method] = {}
        self.store: Dict[str, Dict[str, Any]] = store
        # Anything else the caller passed is kept for the host
        self.extra: Dict[str, Any] = options

    def for_operation(self, name: str, **overrides: Any) -> Dict[str, Any]:
        """Return a fresh copy of the options for one operation.

        Args:
            name: Operation name from ``STORE_METHODS``
            **overrides: Values merged over the stored options for this call only

        Returns:
            New dictionary safe to pass to the driver

        Raises:
            InvalidRequestError: If ``name`` is not a known operation
        """
        if name not in self.store:
            raise InvalidRequestError(f"Unknown store operation: {name}")
        resolved = copy.deepcopy(self.store[name])
        resolved.update(overrides)
        return resolved

    def as_dict(self) -> Dict[str, Any]:
        """Return a deep copy of the resolved options in their input shape."""
        result = copy.deepcopy(self.extra)
        result[self.driver_key] = copy.deepcopy(self.driver)
        result["store"] = copy.deepcopy(self.store)
        return result


class Store(ABC):
    """Abstract base class for CRUD stores.

    Requests are mappings with the optional fields ``query``, ``id`` and
    ``data``. Each operation performs a single backend call and returns a
    normalized result; backend errors propagate unchanged.
    """

    @abstractmethod
    def create(self, request: Mapping[str, Any]) -> Dict[str, Any]:
        """Insert ``request["data"]`` (one record or a sequence of records).

        Raises:
            InvalidRequestError: If data is neither a record nor a sequence
        """
        pass

    @abstractmethod
    def remove(self, request: Mapping[str, Any]) -> Dict[str, Any]:
        """Delete all records matching ``request["query"]``."""
        pass

    @abstractmethod
    def remove_by_id(self, request: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """Delete the record identified by ``request["id"]`` and return it."""
        pass

    @abstractmethod
    def update(self, request: Mapping[str, Any], data: Any = None) -> Optional[Dict[str, Any]]:
        """Update the first record matching ``request["query"]``."""
        pass

    @abstractmethod
    def update_by_id(self, request: Mapping[str, Any], data: Any = None) -> Optional[Dict[str, Any]]:
        """Update the record identified by ``request["id"]``."""
        pass

    @abstractmethod
    def find(
        self, request: Mapping[str, Any], options: Optional[Mapping[str, Any]] = None
    ) -> Dict[str, Any]:
        """Find records matching ``request["query"]``."""
        pass

    @abstractmethod
    def find_by_id(self, request: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """Find the record identified by ``request["id"]``."""
        pass

    @abstractmethod
    def replace(self, request: Mapping[str, Any], data: Any = None) -> Dict[str, Any]:
        """Upsert all records matching ``request["query"]``."""
        pass

    @abstractmethod
    def replace_by_id(self, request: Mapping[str, Any], data: Any = None) -> Optional[Dict[str, Any]]:
        """Replace the record identified by ``request["id"]``."""
        pass

    def dispatch(self, cmd: str, request: Mapping[str, Any], options: Optional[Mapping[str, Any]] = None) -> Any:
        """Run the operation named ``cmd`` (a ``STORE_METHODS`` entry).

        Args:
            cmd: Operation name as used on the wire, e.g. ``"findById"``
            request: Request mapping
            options: Find options, only used by ``find``

        Returns:
            The operation's normalized result

        Raises:
            InvalidRequestError: If ``cmd`` is not a known operation
        """
        try:
            method = getattr(self, _METHOD_NAMES[cmd])
        except KeyError as e:
            raise InvalidRequestError(f"Unknown store operation: {cmd}") from e

        if cmd == "find":
            return method(request, options)
        return method(request)

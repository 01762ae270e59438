# SPDX-License-Identifier: MIT
# Copyright (c) 2025 mongo-store contributors

"""Shared fixtures for mongo-store tests."""

from unittest.mock import MagicMock

import pytest
from bson import ObjectId


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: tests that need a running MongoDB instance"
    )


class FakeCursor:
    """Minimal stand-in for a pymongo cursor over an in-memory list.

    Like the real cursor, skip is applied before limit regardless of call order.
    """

    def __init__(self, records):
        self.records = list(records)
        self.calls = []
        self._limit = 0
        self._skip = 0
        self._sort = None

    def limit(self, n):
        self.calls.append(("limit", n))
        self._limit = n
        return self

    def skip(self, n):
        self.calls.append(("skip", n))
        self._skip = n
        return self

    def sort(self, spec):
        self.calls.append(("sort", spec))
        self._sort = spec
        return self

    def __iter__(self):
        records = self.records
        if self._sort:
            for key, direction in reversed(self._sort):
                records = sorted(records, key=lambda r: r[key], reverse=direction < 0)
        records = records[self._skip:]
        if self._limit:
            records = records[:self._limit]
        return iter(records)


@pytest.fixture
def collection():
    """A MagicMock standing in for a pymongo Collection."""
    return MagicMock(name="collection")


@pytest.fixture
def records():
    """Five ordered records."""
    return [{"_id": ObjectId(), "n": i, "name": f"item-{i}"} for i in range(1, 6)]


@pytest.fixture
def make_cursor():
    """Build a FakeCursor over the given records."""
    return FakeCursor

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 mongo-store contributors

"""Integration tests for MongoStore against a real MongoDB instance."""

import os

import pytest
from pymongo import ReturnDocument

from mongo_store import MongoStoreConfig, MongoStoreFactory, StoreConnectionError

COLLECTION = "test_integration"


def get_mongodb_config():
    """Get MongoDB configuration from environment variables."""
    return MongoStoreConfig(
        host=os.getenv("MONGODB_HOST", "localhost"),
        port=int(os.getenv("MONGODB_PORT", "27017")),
        username=os.getenv("MONGODB_USERNAME"),
        password=os.getenv("MONGODB_PASSWORD"),
        database=os.getenv("MONGODB_DATABASE", "test_mongo_store"),
        client_options={"serverSelectionTimeoutMS": 2000},
        store_options={
            "update": {"return_document": ReturnDocument.AFTER},
            "updateById": {"return_document": ReturnDocument.AFTER},
            "replaceById": {"return_document": ReturnDocument.AFTER},
        },
    )


@pytest.fixture(scope="module")
def factory():
    """Connect to a real MongoDB instance for integration tests."""
    factory = MongoStoreFactory(get_mongodb_config())
    try:
        factory.connect()
    except StoreConnectionError:
        pytest.skip("Could not connect to MongoDB - skipping integration tests")

    yield factory

    factory.disconnect()


@pytest.fixture
def store(factory):
    """A store over a freshly dropped collection."""
    factory.database[COLLECTION].drop()
    yield factory.store(COLLECTION)
    factory.database[COLLECTION].drop()


@pytest.mark.integration
class TestMongoStoreIntegration:
    """Integration tests for MongoStore."""

    def test_create_and_find_by_id(self, store):
        """Test inserting and retrieving a record."""
        created = store.create({"data": {"name": "Alice", "age": 30}})

        found = store.find_by_id({"id": created["id"]})

        assert found["name"] == "Alice"
        assert str(found["_id"]) == created["id"]

    def test_bulk_create_and_page(self, store):
        """Test paging through bulk-inserted records."""
        created = store.create({"data": [{"n": i} for i in range(1, 6)]})
        assert len(created["ids"]) == 5

        page = store.find({"query": {}}, {"limit": 2, "offset": 1, "orderBy": {"n": 1}, "fields": {"_id": 0}})

        assert page["result"] == [{"n": 2}, {"n": 3}]
        assert page["limit"] == 2
        assert page["offset"] == 1

    def test_update_and_remove(self, store):
        """Test updating by id and removing by query."""
        created = store.create({"data": {"name": "Bob", "age": 25}})

        updated = store.update_by_id({"id": created["id"]}, {"$set": {"age": 26}})
        assert updated["age"] == 26

        assert store.remove({"query": {"name": "Bob"}}) == {"deletedCount": 1}
        assert store.find_by_id({"id": created["id"]}) is None

    def test_replace_upserts(self, store):
        """Test that replace inserts when nothing matches."""
        result = store.replace({"query": {"sku": "A-1"}}, {"$set": {"qty": 3}})

        assert result["matchedCount"] == 0
        assert result["upsertedCount"] == 1
        assert result["upsertedId"] is not None

        result = store.replace({"query": {"sku": "A-1"}}, {"$set": {"qty": 4}})
        assert result == {"matchedCount": 1, "modifiedCount": 1, "upsertedCount": 0, "upsertedId": None}

    def test_replace_and_remove_by_id(self, store):
        """Test replacing then removing a record by id."""
        created = store.create({"data": {"name": "Carol"}})

        replaced = store.replace_by_id({"id": created["id"]}, {"name": "Caroline"})
        assert replaced["name"] == "Caroline"

        removed = store.remove_by_id({"id": created["id"]})
        assert removed["name"] == "Caroline"
        assert store.remove_by_id({"id": created["id"]}) is None

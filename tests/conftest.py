from __future__ import annotations

import asyncio
from typing import Any

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from centivo_users_api.app.core.config import Settings
from centivo_users_api.app.core.db import MongoContext
from centivo_users_api.app.main import create_app


ADULT_ID = "507f1f77bcf86cd799439012"
UNDERAGE_ID = "507f1f77bcf86cd799439013"
MISSING_ID = "507f1f77bcf86cd799439011"


class FakeCollection:
    """In-memory stand-in for a Motor collection.

    Supports the only query shape the service issues: ``_id`` equality
    combined with an ``age`` ``$gt`` bound.
    """

    def __init__(self, documents: list[dict[str, Any]] | None = None) -> None:
        self.documents = list(documents or [])
        self.queries: list[dict[str, Any]] = []
        self.error: Exception | None = None
        self.delay: float = 0.0

    async def find_one(self, filter: dict[str, Any]) -> dict[str, Any] | None:
        self.queries.append(filter)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        for doc in self.documents:
            if doc.get("_id") != filter["_id"]:
                continue
            age = doc.get("age")
            if age is not None and age > filter["age"]["$gt"]:
                return dict(doc)
        return None


class FakeAdmin:
    def __init__(self) -> None:
        self.error: Exception | None = None
        self.commands: list[str] = []

    async def command(self, name: str) -> dict[str, Any]:
        self.commands.append(name)
        if self.error is not None:
            raise self.error
        return {"ok": 1.0}


class FakeMongoClient:
    def __init__(self, collection: FakeCollection) -> None:
        self.admin = FakeAdmin()
        self.collection = collection
        self.closed = False
        self.requested: list[tuple[str, str]] = []

    def __getitem__(self, database_name: str) -> "FakeDatabase":
        return FakeDatabase(self, database_name)

    async def close(self) -> None:
        self.closed = True


class FakeDatabase:
    def __init__(self, client: FakeMongoClient, name: str) -> None:
        self.client = client
        self.name = name

    def __getitem__(self, collection_name: str) -> FakeCollection:
        self.client.requested.append((self.name, collection_name))
        return self.client.collection


@pytest.fixture
def users_collection() -> FakeCollection:
    return FakeCollection(
        [
            {"_id": ObjectId(ADULT_ID), "age": 25},
            {"_id": ObjectId(UNDERAGE_ID), "age": 21},
        ]
    )


@pytest.fixture
def mongo_client(users_collection) -> FakeMongoClient:
    return FakeMongoClient(users_collection)


@pytest.fixture
def mongo_context(mongo_client) -> MongoContext:
    context = MongoContext(mongo_client, "Centivo", "users")
    asyncio.run(context.connect())
    return context


@pytest.fixture
def app_settings() -> Settings:
    return Settings(query_timeout_seconds=0.5, not_found_as_404=False)


@pytest.fixture
def client(mongo_context, app_settings) -> TestClient:
    app = create_app(context=mongo_context, app_settings=app_settings)
    return TestClient(app)


@pytest.fixture
def unreachable_error() -> Exception:
    return ServerSelectionTimeoutError("localhost:27017: [Errno 111] Connection refused")

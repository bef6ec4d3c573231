"""Shared pytest fixtures.

MongoDB is replaced by a small in-memory double that understands the
subset of the async collection API the services use.
"""

from copy import deepcopy
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
import pytest_asyncio
from pymongo.errors import DuplicateKeyError

from blognote.app import App
from blognote.config import Config
from blognote.core.core import Core
from blognote.core.modules.session.models import AuthContext
from blognote.core.modules.user.models import User


BSON_INT64_MAX = 2**63 - 1


class FakeInsertOneResult:
    def __init__(self, inserted_id: Any) -> None:
        self.inserted_id = inserted_id


class FakeUpdateResult:
    def __init__(self, matched_count: int) -> None:
        self.matched_count = matched_count
        self.modified_count = matched_count


class FakeDeleteResult:
    def __init__(self, deleted_count: int) -> None:
        self.deleted_count = deleted_count


def matches(doc: dict[str, Any], query: dict[str, Any]) -> bool:
    for key, condition in query.items():
        value = doc.get(key)
        if isinstance(condition, dict) and "$in" in condition:
            if value not in condition["$in"]:
                return False
        elif value != condition:
            return False
    return True


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs
        self._sort: list[tuple[str, int]] = []
        self._skip = 0
        self._limit = 0

    def sort(self, key_or_list: Any, direction: int | None = None) -> "FakeCursor":
        if isinstance(key_or_list, str):
            self._sort.append((key_or_list, direction or 1))
        else:
            self._sort.extend(key_or_list)
        return self

    def skip(self, skip: int) -> "FakeCursor":
        if skip > BSON_INT64_MAX:
            raise OverflowError("MongoDB can only handle up to 8-byte ints")
        self._skip = skip
        return self

    def limit(self, limit: int) -> "FakeCursor":
        self._limit = limit
        return self

    def _result(self) -> list[dict[str, Any]]:
        docs = list(self._docs)
        # Stable sorts applied from the last key to the first give a multi-key order
        for key, direction in reversed(self._sort):
            docs.sort(key=lambda doc: doc[key], reverse=direction < 0)
        docs = docs[self._skip :]
        if self._limit:
            docs = docs[: self._limit]
        return [deepcopy(doc) for doc in docs]

    async def to_list(self, length: int | None = None) -> list[dict[str, Any]]:
        return self._result()

    async def __aiter__(self):
        for doc in self._result():
            yield doc


class FakeCollection:
    def __init__(self) -> None:
        self.docs: list[dict[str, Any]] = []
        self.unique_fields: list[str] = []

    async def create_index(self, keys: list[tuple[str, int]], unique: bool = False, **kwargs: Any) -> str:
        if unique:
            self.unique_fields.append(keys[0][0])
        return "_".join(f"{key}_{direction}" for key, direction in keys)

    async def insert_one(self, doc: dict[str, Any]) -> FakeInsertOneResult:
        for field in self.unique_fields:
            if any(existing.get(field) == doc.get(field) for existing in self.docs):
                raise DuplicateKeyError(f"E11000 duplicate key error: {field}", 11000)
        self.docs.append(deepcopy(doc))
        return FakeInsertOneResult(doc["_id"])

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        for doc in self.docs:
            if matches(doc, query):
                return deepcopy(doc)
        return None

    def find(self, query: dict[str, Any] | None = None) -> FakeCursor:
        return FakeCursor([doc for doc in self.docs if matches(doc, query or {})])

    async def count_documents(self, query: dict[str, Any], **kwargs: Any) -> int:
        count = sum(1 for doc in self.docs if matches(doc, query))
        if kwargs.get("limit"):
            count = min(count, kwargs["limit"])
        return count

    async def update_one(self, query: dict[str, Any], update: dict[str, Any]) -> FakeUpdateResult:
        for doc in self.docs:
            if matches(doc, query):
                for key, value in update.get("$set", {}).items():
                    doc[key] = deepcopy(value)
                for key, value in update.get("$push", {}).items():
                    doc.setdefault(key, []).append(deepcopy(value))
                return FakeUpdateResult(1)
        return FakeUpdateResult(0)

    async def delete_one(self, query: dict[str, Any]) -> FakeDeleteResult:
        for index, doc in enumerate(self.docs):
            if matches(doc, query):
                del self.docs[index]
                return FakeDeleteResult(1)
        return FakeDeleteResult(0)


class FakeDatabase:
    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())


class FakeMongoClient:
    def __init__(self) -> None:
        self.databases: dict[str, FakeDatabase] = {}
        self.closed = False

    def get_database(self, name: str) -> FakeDatabase:
        return self.databases.setdefault(name, FakeDatabase())

    async def aclose(self) -> None:
        self.closed = True


class TickingClock:
    """Returns a strictly increasing UTC time on every call."""

    def __init__(self) -> None:
        self.current = datetime(2024, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        self.current += timedelta(minutes=1)
        return self.current


@pytest.fixture
def config():
    return Config(
        database_url="mongodb://localhost:27017/blognote_test",
        host="127.0.0.1",
        port=3100,
        debug=True,
        jwt_secret_key="test-secret",
        bcrypt_rounds=4,
    )


@pytest.fixture
def mongo_client():
    return FakeMongoClient()


@pytest.fixture
def database(mongo_client):
    return mongo_client.get_database("blognote_test")


@pytest.fixture
def core(config, mongo_client):
    """Core with services wired up but not started."""
    return Core(config, mongo_client)


@pytest.fixture
def clock(monkeypatch):
    """Give every post a distinct creation time."""
    ticking = TickingClock()
    monkeypatch.setattr("blognote.core.modules.post.service.now", ticking)
    return ticking


@pytest_asyncio.fixture
async def app(config, mongo_client):
    app = App(config, mongo_client)
    async with app.lifespan():
        yield app


@pytest.fixture
def services(app):
    return app._core.services


@pytest.fixture
def anonymous():
    return AuthContext.anonymous()


@pytest_asyncio.fixture
async def alice(app) -> AuthContext:
    """Registered user, returned as the auth context of a logged-in request."""
    await app.create_user("alice@example.com", "Alice", "alice-secret")
    result = await app.login("alice@example.com", "alice-secret")
    return app.get_auth_context(result.token)


@pytest_asyncio.fixture
async def bob(app) -> AuthContext:
    await app.create_user("bob@example.com", "Bob", "bob-secret")
    result = await app.login("bob@example.com", "bob-secret")
    return app.get_auth_context(result.token)


@pytest.fixture
def mock_user():
    return User(
        email="testuser@example.com",
        name="Test User",
        password_hash="$2b$12$hashed_password_here",
    )

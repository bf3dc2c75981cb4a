import copy
import os
from types import SimpleNamespace

# Must be set before app modules read settings
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("ENVIRONMENT", "development")

import httpx
import pytest
import pytest_asyncio
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo import ReturnDocument
from pymongo.errors import ServerSelectionTimeoutError

from app.main import app
from app.client.api_client import UsersApiClient


class FakeCursor:
    def __init__(self, documents):
        self._documents = documents

    async def to_list(self, length=None):
        if length is None:
            return list(self._documents)
        return list(self._documents)[:length]


class FakeUsersCollection:
    """
    In-memory stand-in for the Motor users collection.

    Implements only the calls user_service makes. Set `fail` to make
    every call raise ServerSelectionTimeoutError, as an unreachable
    server would.
    """

    def __init__(self):
        self.documents = []
        self.fail = False

    def _check(self):
        if self.fail:
            raise ServerSelectionTimeoutError("localhost:27017: connection refused")

    def _index(self, filter):
        for i, doc in enumerate(self.documents):
            if doc["_id"] == filter["_id"]:
                return i
        return None

    def find(self, filter=None):
        self._check()
        return FakeCursor([copy.deepcopy(doc) for doc in self.documents])

    async def insert_one(self, document):
        self._check()
        document.setdefault("_id", ObjectId())
        self.documents.append(copy.deepcopy(document))
        return SimpleNamespace(inserted_id=document["_id"])

    async def find_one_and_replace(self, filter, replacement, return_document=ReturnDocument.BEFORE):
        self._check()
        i = self._index(filter)
        if i is None:
            return None
        before = self.documents[i]
        after = {"_id": before["_id"], **copy.deepcopy(replacement)}
        self.documents[i] = after
        return copy.deepcopy(after if return_document == ReturnDocument.AFTER else before)

    async def find_one_and_delete(self, filter):
        self._check()
        i = self._index(filter)
        if i is None:
            return None
        return self.documents.pop(i)


@pytest.fixture
def users_collection(monkeypatch):
    """Fake collection wired into the service layer."""
    collection = FakeUsersCollection()
    monkeypatch.setattr("app.services.user_service.get_users_collection", lambda: collection)
    return collection


@pytest.fixture
def client(users_collection):
    # Not used as a context manager: lifespan would try to reach MongoDB
    return TestClient(app)


@pytest_asyncio.fixture
async def api_client(users_collection):
    """UsersApiClient talking to the app in-process."""
    transport = httpx.ASGITransport(app=app)
    api = UsersApiClient(base_url="http://testserver", transport=transport)
    yield api
    await api.close()


@pytest.fixture
def sample_user():
    return {
        "name": "A",
        "age": 30,
        "city": "X",
        "email": "a@x.com",
        "hobbies": "x,y",
    }

import copy

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

import config
from main import app


IPHONE_UA = "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 Mobile/15E148"
ANDROID_UA = "Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 Chrome/120.0 Mobile Safari/537.36"
DESKTOP_UA = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 Chrome/120.0 Safari/537.36"

CAT_GAME = {
    "id": "cat-game",
    "name": "Cat Game",
    "appStoreUrl": "https://apps.apple.com/x",
    "playStoreUrl": "https://play.google.com/x",
}


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def client(data_dir, monkeypatch):
    monkeypatch.setattr(config, "DATA_DIR", str(data_dir))
    monkeypatch.setattr(config, "LINK_STORE_BACKEND", "json")
    with TestClient(app) as c:
        yield c


class FakeKVCollection:
    """Just enough of a Motor collection for MongoDocumentStore."""

    def __init__(self):
        self.docs = {}

    async def find_one(self, query):
        doc = self.docs.get(query["_id"])
        return copy.deepcopy(doc) if doc is not None else None

    async def replace_one(self, query, replacement, upsert=False):
        if query["_id"] not in self.docs and not upsert:
            return None
        self.docs[query["_id"]] = copy.deepcopy(replacement)


class DownKVCollection:
    async def find_one(self, query):
        raise ServerSelectionTimeoutError("no servers available")

    async def replace_one(self, query, replacement, upsert=False):
        raise ServerSelectionTimeoutError("no servers available")

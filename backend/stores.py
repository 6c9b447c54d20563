"""
Whole-collection stores for the Desteli Studio site backend

Each store persists one ordered list of JSON objects and only supports
reading the full list and replacing the full list. Callers load, compute
the next list in memory, and save it back. There is no locking: concurrent
writers race and the last save wins.
"""
import asyncio
import json
import logging
import os
import stat
import tempfile
from typing import List

from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

DEFAULT_FILE_MODE = 0o644


class StorageUnavailableError(Exception):
    """Raised when the persistence medium cannot be read or written."""
    def __init__(self, message: str, cause: Exception = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


class JsonFileStore:
    """Store backed by a single JSON array document on disk."""

    backend = "json"

    def __init__(self, path: str):
        self.path = path

    def __repr__(self):
        return f"JsonFileStore({self.path!r})"

    async def load_all(self) -> List[dict]:
        return await asyncio.to_thread(self._read)

    async def save_all(self, records: List[dict]) -> None:
        await asyncio.to_thread(self._write, list(records))

    def _read(self) -> List[dict]:
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read {self.path}: {e}")
            raise StorageUnavailableError(f"Could not read {os.path.basename(self.path)}", e)

        if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
            logger.error(f"{self.path} does not hold a JSON array of objects")
            raise StorageUnavailableError(f"{os.path.basename(self.path)} is not a JSON array of objects")
        return data

    def _file_mode(self) -> int:
        """Mode of the current file, or 0o644 for a first save (mkstemp creates 0o600)."""
        try:
            return stat.S_IMODE(os.stat(self.path).st_mode)
        except FileNotFoundError:
            return DEFAULT_FILE_MODE

    def _write(self, records: List[dict]) -> None:
        directory = os.path.dirname(self.path) or "."
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".tmp-", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
            os.chmod(tmp_path, self._file_mode())
            # os.replace is atomic, so readers see either the old or the new list
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"Failed to write {self.path}: {e}")
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageUnavailableError(f"Could not write {os.path.basename(self.path)}", e)


class MongoDocumentStore:
    """
    Store backed by one MongoDB document holding the whole list.

    The document looks like {"_id": key, "records": [...]}, which keeps the
    same read/replace semantics as the JSON file.
    """

    backend = "mongo"

    def __init__(self, collection, key: str):
        self.collection = collection
        self.key = key

    def __repr__(self):
        return f"MongoDocumentStore({self.key!r})"

    async def load_all(self) -> List[dict]:
        try:
            doc = await self.collection.find_one({"_id": self.key})
        except PyMongoError as e:
            logger.error(f"Failed to load '{self.key}' from MongoDB: {e}")
            raise StorageUnavailableError(f"Could not read '{self.key}'", e)

        if not doc:
            return []
        records = doc.get("records") or []
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            logger.error(f"'{self.key}' in MongoDB does not hold a list of objects")
            raise StorageUnavailableError(f"'{self.key}' does not hold a list of objects")
        return records

    async def save_all(self, records: List[dict]) -> None:
        try:
            await self.collection.replace_one(
                {"_id": self.key},
                {"_id": self.key, "records": list(records)},
                upsert=True
            )
        except PyMongoError as e:
            logger.error(f"Failed to save '{self.key}' to MongoDB: {e}")
            raise StorageUnavailableError(f"Could not write '{self.key}'", e)

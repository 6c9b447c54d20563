"""
App-link directory service for the Desteli Studio site.

This service owns validation and the upsert/remove rules for app-link
records, and the lookup used by the public redirect page. Persistence is
delegated to a whole-collection store (see stores.py).
"""
import logging
import re
from typing import List, Tuple

from pydantic import ValidationError

from models import AppLinkRecord, AppLinkUpsert
from stores import StorageUnavailableError
from utils import utc_now, isoformat_z

logger = logging.getLogger(__name__)

URL_PATTERN = re.compile(r"^https?://.+")

REQUIRED_FIELDS = ("id", "name", "appStoreUrl", "playStoreUrl")
URL_FIELDS = ("appStoreUrl", "playStoreUrl")


class AppLinkServiceError(Exception):
    """Base exception for app-link service errors."""
    def __init__(self, code: str, message: str, details: dict = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class AppLinkValidationError(AppLinkServiceError):
    """Raised when a candidate record fails validation."""
    def __init__(self, failures: List[str]):
        super().__init__(
            "VALIDATION_FAILED",
            "; ".join(failures),
            {"failures": failures}
        )


class AppLinkNotFoundError(AppLinkServiceError):
    """Raised when no (active) record has the requested id."""
    def __init__(self, link_id: str):
        super().__init__("NOT_FOUND", f"App link not found: {link_id}")


class AppLinkStorageError(AppLinkServiceError):
    """Raised when the underlying store cannot be read or written."""
    def __init__(self, reason: str):
        super().__init__("STORAGE_UNAVAILABLE", reason)


class AppLinkService:
    """Service for app-link CRUD and public lookup."""

    def __init__(self, store):
        self.store = store

    # =========================================================================
    # Store access
    # =========================================================================

    async def _load(self) -> List[dict]:
        try:
            return await self.store.load_all()
        except StorageUnavailableError as e:
            raise AppLinkStorageError(e.message)

    async def _save(self, records: List[dict]) -> None:
        try:
            await self.store.save_all(records)
        except StorageUnavailableError as e:
            raise AppLinkStorageError(e.message)

    @staticmethod
    def _to_record(raw: dict) -> AppLinkRecord:
        try:
            return AppLinkRecord(**raw)
        except (TypeError, ValidationError) as e:
            logger.error(f"Malformed app link in store: {e}")
            raise AppLinkStorageError("Stored app links are malformed")

    # =========================================================================
    # Validation
    # =========================================================================

    @staticmethod
    def validate(candidate: AppLinkUpsert) -> List[str]:
        """
        Check a candidate in a single pass.

        Returns:
            List of failed constraints, empty when the candidate is valid
        """
        failures = []
        for field in REQUIRED_FIELDS:
            value = getattr(candidate, field)
            if value is None or (isinstance(value, str) and not value.strip()):
                failures.append(f"{field} is required")
            elif not isinstance(value, str):
                failures.append(f"{field} must be a string")
            elif field in URL_FIELDS and not URL_PATTERN.match(value):
                failures.append(f"{field} must be an http(s) URL")

        if candidate.active is not None and not isinstance(candidate.active, bool):
            failures.append("active must be true or false")

        return failures

    # =========================================================================
    # Read Operations
    # =========================================================================

    async def list_all(self) -> List[AppLinkRecord]:
        """All records in stored order, including inactive ones."""
        records = await self._load()
        return [self._to_record(r) for r in records]

    async def list_active(self) -> List[AppLinkRecord]:
        return [r for r in await self.list_all() if r.active]

    async def find_active_by_id(self, link_id: str) -> AppLinkRecord:
        """
        Look up a record for the public redirect page.

        Inactive records are reported exactly like missing ones.

        Raises:
            AppLinkNotFoundError: If no active record has this id
            AppLinkStorageError: If the store cannot be read
        """
        for r in await self._load():
            if r.get("id") == link_id and r.get("active", True):
                return self._to_record(r)
        raise AppLinkNotFoundError(link_id)

    # =========================================================================
    # Write Operations
    # =========================================================================

    async def upsert(self, candidate: AppLinkUpsert) -> Tuple[AppLinkRecord, bool]:
        """
        Create a record, or update the record with the same id in place.

        Returns:
            (record, created) where created is False for an update

        Raises:
            AppLinkValidationError: If the candidate is invalid (store untouched)
            AppLinkStorageError: If the store cannot be read or written
        """
        failures = self.validate(candidate)
        if failures:
            raise AppLinkValidationError(failures)

        records = await self._load()
        index = next(
            (i for i, r in enumerate(records) if r.get("id") == candidate.id),
            -1
        )

        record = AppLinkRecord(
            id=candidate.id,
            name=candidate.name,
            appStoreUrl=candidate.appStoreUrl,
            playStoreUrl=candidate.playStoreUrl,
            active=True if candidate.active is None else candidate.active,
            createdAt=(records[index].get("createdAt") if index >= 0 else None) or isoformat_z(utc_now()),
        )

        if index >= 0:
            records[index] = record.model_dump()
        else:
            records.append(record.model_dump())

        await self._save(records)

        created = index < 0
        logger.info(f"App link '{record.id}' {'created' if created else 'updated'}")
        return record, created

    async def remove(self, link_id: str) -> None:
        """
        Delete a record by id.

        Raises:
            AppLinkNotFoundError: If no record has this id (store not rewritten)
            AppLinkStorageError: If the store cannot be read or written
        """
        records = await self._load()
        remaining = [r for r in records if r.get("id") != link_id]

        if len(remaining) == len(records):
            raise AppLinkNotFoundError(link_id)

        await self._save(remaining)
        logger.info(f"App link '{link_id}' deleted")

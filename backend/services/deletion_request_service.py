"""
Account deletion request intake.

Requests are appended to their own whole-collection store and left in the
"pending" state for an operator to process.
"""
import logging
import re
from models import DeletionRequestCreate, DeletionRequestRecord
from stores import StorageUnavailableError
from utils import utc_now, isoformat_z

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
NOT_SPECIFIED = "Belirtilmedi"

CONFIRMATION_MESSAGE = (
    "Your account deletion request has been received. "
    "It will be processed within 30 days."
)


class DeletionRequestServiceError(Exception):
    """Base exception for deletion request errors."""
    def __init__(self, code: str, message: str, details: dict = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DeletionRequestValidationError(DeletionRequestServiceError):
    def __init__(self, reason: str):
        super().__init__("VALIDATION_FAILED", reason)


class DeletionRequestStorageError(DeletionRequestServiceError):
    def __init__(self, reason: str):
        super().__init__("STORAGE_UNAVAILABLE", reason)


class DeletionRequestService:
    """Validates and records account deletion requests."""

    def __init__(self, store):
        self.store = store

    async def submit(self, data: DeletionRequestCreate) -> DeletionRequestRecord:
        """
        Append a new pending request.

        Raises:
            DeletionRequestValidationError: If username/email are missing or the email is malformed
            DeletionRequestStorageError: If the store cannot be read or written
        """
        if not (data.username and data.username.strip()) or not (data.email and data.email.strip()):
            raise DeletionRequestValidationError("Username and email are required")
        if not EMAIL_PATTERN.match(data.email):
            raise DeletionRequestValidationError("Please enter a valid email address")

        now = utc_now()
        record = DeletionRequestRecord(
            id=int(now.timestamp() * 1000),
            app=data.app or NOT_SPECIFIED,
            username=data.username,
            email=data.email,
            reason=data.reason or NOT_SPECIFIED,
            requestDate=isoformat_z(now),
            status="pending"
        )

        try:
            records = await self.store.load_all()
            records.append(record.model_dump())
            await self.store.save_all(records)
        except StorageUnavailableError as e:
            raise DeletionRequestStorageError(e.message)

        logger.info(f"Deletion request {record.id} recorded for app '{record.app}'")
        return record

"""
Utility functions for the Desteli Studio site backend
Shared helper functions for error handling and formatting
"""
from datetime import datetime, timezone
from typing import Optional


def error_payload(code: str, message: str, details: Optional[dict] = None) -> dict:
    """Create a standardized error response payload"""
    return {
        "code": code,
        "message": message,
        "details": details
    }


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def isoformat_z(dt: datetime) -> str:
    """ISO-8601 with millisecond precision and a trailing Z, e.g. 2025-10-01T12:00:00.000Z"""
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"

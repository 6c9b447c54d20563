"""
Pydantic models for the Desteli Studio site API
"""
from pydantic import BaseModel
from typing import Any, Optional


class AppLinkUpsert(BaseModel):
    # AppLinkService.validate reports missing and mistyped fields
    id: Any = None
    name: Any = None
    appStoreUrl: Any = None
    playStoreUrl: Any = None
    active: Any = None  # None means true


class AppLinkRecord(BaseModel):
    id: str
    name: str
    appStoreUrl: str
    playStoreUrl: str
    active: bool = True
    createdAt: str


class AppLinkMutationResponse(BaseModel):
    success: bool
    message: str
    data: AppLinkRecord


class MessageResponse(BaseModel):
    success: bool
    message: str


class DeletionRequestCreate(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    reason: Optional[str] = None
    app: Optional[str] = None


class DeletionRequestRecord(BaseModel):
    id: int
    app: str
    username: str
    email: str
    reason: str
    requestDate: str
    status: str = "pending"


class HealthResponse(BaseModel):
    status: str
    store: str

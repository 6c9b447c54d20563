"""
App-link admin routes for the Desteli Studio site

Thin HTTP handlers that delegate to AppLinkService. The admin surface has
no authentication.
"""
from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List, Optional
import logging

from models import AppLinkUpsert, AppLinkRecord, AppLinkMutationResponse, MessageResponse
from dependencies import get_app_link_service
from utils import error_payload
from services.app_link_service import AppLinkService, AppLinkServiceError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/app-links", tags=["app-links"])


def handle_service_error(e: AppLinkServiceError) -> HTTPException:
    """Convert service exceptions to HTTP exceptions."""
    status_map = {
        "VALIDATION_FAILED": 400,
        "NOT_FOUND": 404,
        "STORAGE_UNAVAILABLE": 500,
    }
    status_code = status_map.get(e.code, 500)
    return HTTPException(
        status_code=status_code,
        detail=error_payload(e.code, e.message, e.details if e.details else None)
    )


@router.get("", response_model=List[AppLinkRecord])
async def list_app_links(service: AppLinkService = Depends(get_app_link_service)):
    """List every app link, active or not."""
    try:
        return await service.list_all()
    except AppLinkServiceError as e:
        raise handle_service_error(e)


@router.post("", response_model=AppLinkMutationResponse)
async def upsert_app_link(
    data: AppLinkUpsert,
    service: AppLinkService = Depends(get_app_link_service)
):
    """Create an app link, or update the one with the same id."""
    try:
        record, created = await service.upsert(data)
    except AppLinkServiceError as e:
        raise handle_service_error(e)

    return AppLinkMutationResponse(
        success=True,
        message="created" if created else "updated",
        data=record
    )


@router.delete("", response_model=MessageResponse)
async def delete_app_link(
    id: Optional[str] = Query(None),
    service: AppLinkService = Depends(get_app_link_service)
):
    """Delete an app link by id (query parameter)."""
    if not id:
        raise HTTPException(status_code=400, detail=error_payload("INVALID_REQUEST", "id is required"))

    try:
        await service.remove(id)
    except AppLinkServiceError as e:
        raise handle_service_error(e)

    return MessageResponse(success=True, message="App link deleted")

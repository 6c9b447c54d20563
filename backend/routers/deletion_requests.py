"""
Account deletion request routes for the Desteli Studio site
"""
from fastapi import APIRouter, HTTPException, Depends
import logging

from models import DeletionRequestCreate, MessageResponse
from dependencies import get_deletion_request_service
from utils import error_payload
from services.deletion_request_service import (
    DeletionRequestService,
    DeletionRequestServiceError,
    CONFIRMATION_MESSAGE
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/delete-account", tags=["deletion-requests"])


@router.post("", response_model=MessageResponse)
async def submit_deletion_request(
    data: DeletionRequestCreate,
    service: DeletionRequestService = Depends(get_deletion_request_service)
):
    try:
        await service.submit(data)
    except DeletionRequestServiceError as e:
        status_code = 400 if e.code == "VALIDATION_FAILED" else 500
        raise HTTPException(status_code=status_code, detail=error_payload(e.code, e.message))

    return MessageResponse(success=True, message=CONFIRMATION_MESSAGE)

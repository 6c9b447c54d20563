"""
Request dependencies for the Desteli Studio site backend
Hands route handlers the services built in the lifespan
"""
from fastapi import Request

from services.app_link_service import AppLinkService
from services.deletion_request_service import DeletionRequestService
from services.redirect_service import RedirectResolver


def get_app_link_service(request: Request) -> AppLinkService:
    return request.app.state.app_link_service


def get_redirect_resolver(request: Request) -> RedirectResolver:
    return request.app.state.redirect_resolver


def get_deletion_request_service(request: Request) -> DeletionRequestService:
    return request.app.state.deletion_request_service

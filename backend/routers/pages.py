"""
HTML page routes for the Desteli Studio site
"""
from pathlib import Path
from typing import Optional
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from config import SITE_NAME
from dependencies import get_app_link_service, get_redirect_resolver
from services.app_link_service import AppLinkService, AppLinkServiceError
from services.redirect_service import RedirectResolver, RedirectState

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def home(request: Request, service: AppLinkService = Depends(get_app_link_service)):
    try:
        apps = await service.list_active()
    except AppLinkServiceError as e:
        logger.error(f"Home page could not list apps: {e.message}")
        apps = []
    return templates.TemplateResponse(
        request, "home.html", {"site_name": SITE_NAME, "apps": apps}
    )


@router.get("/app/{link_id}", response_class=HTMLResponse)
async def app_redirect(
    request: Request,
    link_id: str,
    resolver: RedirectResolver = Depends(get_redirect_resolver)
):
    """Send mobile visitors to their store, show desktop visitors both links."""
    decision = await resolver.resolve(link_id, request.headers.get("user-agent"))
    status_code = 404 if decision.state == RedirectState.NOT_FOUND else 200
    return templates.TemplateResponse(
        request,
        "redirect.html",
        {"site_name": SITE_NAME, "decision": decision},
        status_code=status_code
    )


@router.get("/admin/app-links", response_class=HTMLResponse)
async def admin_app_links(request: Request):
    return templates.TemplateResponse(request, "admin_app_links.html", {"site_name": SITE_NAME})


@router.get("/delete-account", response_class=HTMLResponse)
async def delete_account_form(request: Request, app: Optional[str] = None):
    return templates.TemplateResponse(
        request, "delete_account.html", {"site_name": SITE_NAME, "app_name": app or ""}
    )

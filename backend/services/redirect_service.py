"""
Redirect resolver for the public /app/{id} page.

Turns an app-link id plus the visitor's User-Agent into a render decision:
redirect to the matching store after a fixed delay (iOS/Android), show both
store links (desktop), or show the not-found page.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from config import REDIRECT_DELAY_MS
from models import AppLinkRecord
from services.app_link_service import (
    AppLinkService,
    AppLinkNotFoundError,
    AppLinkStorageError
)

logger = logging.getLogger(__name__)

IOS_MARKERS = ("iphone", "ipad", "ipod")
ANDROID_MARKERS = ("android",)


class Platform(str, Enum):
    IOS = "ios"
    ANDROID = "android"
    DESKTOP = "desktop"


class RedirectState(str, Enum):
    NOT_FOUND = "not_found"
    LANDING = "landing"
    REDIRECTING = "redirecting"


def classify_platform(user_agent: Optional[str]) -> Platform:
    """Map a User-Agent string to ios, android or desktop. Never fails."""
    ua = (user_agent or "").lower()
    if any(marker in ua for marker in IOS_MARKERS):
        return Platform.IOS
    if any(marker in ua for marker in ANDROID_MARKERS):
        return Platform.ANDROID
    return Platform.DESKTOP


@dataclass
class RedirectDecision:
    state: RedirectState
    platform: Platform
    app_link: Optional[AppLinkRecord] = None
    target_url: Optional[str] = None
    store_label: Optional[str] = None
    delay_ms: int = REDIRECT_DELAY_MS


class RedirectResolver:
    """Decides what the redirect page shows for a given id and visitor."""

    def __init__(self, app_link_service: AppLinkService):
        self.app_links = app_link_service

    async def resolve(self, link_id: str, user_agent: Optional[str]) -> RedirectDecision:
        platform = classify_platform(user_agent)

        try:
            app_link = await self.app_links.find_active_by_id(link_id)
        except AppLinkNotFoundError:
            logger.info(f"Redirect miss for '{link_id}' ({platform.value})")
            return RedirectDecision(state=RedirectState.NOT_FOUND, platform=platform)
        except AppLinkStorageError as e:
            # Visitors get the same page as for an unknown id
            logger.error(f"Redirect lookup for '{link_id}' failed: {e.message}")
            return RedirectDecision(state=RedirectState.NOT_FOUND, platform=platform)

        if platform == Platform.IOS:
            return RedirectDecision(
                state=RedirectState.REDIRECTING,
                platform=platform,
                app_link=app_link,
                target_url=app_link.appStoreUrl,
                store_label="App Store"
            )
        if platform == Platform.ANDROID:
            return RedirectDecision(
                state=RedirectState.REDIRECTING,
                platform=platform,
                app_link=app_link,
                target_url=app_link.playStoreUrl,
                store_label="Play Store"
            )
        return RedirectDecision(state=RedirectState.LANDING, platform=platform, app_link=app_link)

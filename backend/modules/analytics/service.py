"""
Analytics service implementation.

Filters automated traffic, classifies devices and hands records to the
event repository.
"""

import logging
import re
from typing import Optional

from .interfaces import IAnalyticsService, IEventRepository
from .models import ClickBeacon, DeviceType, PageViewBeacon, PageViewRecord, TrackingStats

logger = logging.getLogger(__name__)

BOT_PATTERN = re.compile(
    r"bot|crawler|spider|slurp|wget|curl|python|java|ruby|perl|go-http|headless|phantom",
    re.IGNORECASE,
)
MOBILE_PATTERN = re.compile(r"mobile", re.IGNORECASE)
TABLET_PATTERN = re.compile(r"tablet|ipad", re.IGNORECASE)


def is_bot(user_agent: Optional[str]) -> bool:
    return bool(BOT_PATTERN.search(user_agent or ""))


def classify_device(user_agent: Optional[str]) -> DeviceType:
    ua = user_agent or ""
    if MOBILE_PATTERN.search(ua):
        return DeviceType.MOBILE
    if TABLET_PATTERN.search(ua):
        return DeviceType.TABLET
    return DeviceType.DESKTOP


def client_ip(forwarded_for: Optional[str], peer: Optional[str]) -> str:
    """First X-Forwarded-For hop, else the socket peer, else 'unknown'."""
    first = (forwarded_for or "").split(",")[0].strip()
    return first or peer or "unknown"


class AnalyticsService(IAnalyticsService):
    """Implementation of the analytics sink."""

    def __init__(self, events: IEventRepository):
        self._events = events

    async def record_page_view(
        self,
        beacon: PageViewBeacon,
        user_agent: str,
        ip: str,
        user_id: Optional[int] = None,
    ) -> bool:
        if is_bot(user_agent):
            return False
        record = PageViewRecord(
            session_id=beacon.session_id,
            user_id=user_id,
            page=beacon.page,
            referrer=beacon.referrer,
            ip=ip,
            user_agent=user_agent,
            device=classify_device(user_agent),
        )
        await self._events.log_page_view(record)
        return True

    async def record_click(self, beacon: ClickBeacon, user_agent: str) -> bool:
        if is_bot(user_agent):
            return False
        await self._events.log_click(beacon)
        return True

    async def get_stats(self) -> TrackingStats:
        return await self._events.get_stats()

"""
Tracking endpoints.

The beacon endpoints always answer 200 so a tracking failure can never
break a page load; failures are reported as ``{"ok": false}``.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_analytics_service
from api.middleware.auth import get_optional_session, require_admin
from shared.models import SessionClaims

from .interfaces import IAnalyticsService
from .models import ClickBeacon, PageViewBeacon, TrackingStats, TrackResponse
from .service import client_ip

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/pageview", response_model=TrackResponse)
async def track_page_view(
    request: Request,
    claims: Optional[SessionClaims] = Depends(get_optional_session),
    service: IAnalyticsService = Depends(get_analytics_service),
) -> TrackResponse:
    """Record a page view beacon."""
    try:
        beacon = PageViewBeacon.model_validate(await request.json())
        peer = request.client.host if request.client else None
        await service.record_page_view(
            beacon,
            user_agent=request.headers.get("user-agent", ""),
            ip=client_ip(request.headers.get("x-forwarded-for"), peer),
            user_id=claims.user_id if claims else None,
        )
    except Exception as e:
        logger.debug(f"Page view not recorded: {e}")
        return TrackResponse(ok=False)
    return TrackResponse()


@router.post("/click", response_model=TrackResponse)
async def track_click(
    request: Request,
    service: IAnalyticsService = Depends(get_analytics_service),
) -> TrackResponse:
    """Record a click beacon."""
    try:
        beacon = ClickBeacon.model_validate(await request.json())
        await service.record_click(beacon, user_agent=request.headers.get("user-agent", ""))
    except Exception as e:
        logger.debug(f"Click not recorded: {e}")
        return TrackResponse(ok=False)
    return TrackResponse()


@router.get("/stats", response_model=TrackingStats)
async def get_tracking_stats(
    claims: SessionClaims = Depends(require_admin),
    service: IAnalyticsService = Depends(get_analytics_service),
) -> TrackingStats:
    """Traffic dashboard (admin only)."""
    return await service.get_stats()

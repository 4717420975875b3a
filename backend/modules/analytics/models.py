"""
Analytics data models.

Incoming beacons are parsed leniently; the stats models mirror the rows
returned by the reporting queries.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DeviceType(str, Enum):
    MOBILE = "mobile"
    TABLET = "tablet"
    DESKTOP = "desktop"


class PageViewBeacon(BaseModel):
    """Body sent by the frontend tracker on page load."""

    model_config = ConfigDict(extra="ignore")

    session_id: Optional[str] = None
    page: str
    referrer: Optional[str] = None


class ClickBeacon(BaseModel):
    """Body sent by the frontend tracker on a tracked click."""

    model_config = ConfigDict(extra="ignore")

    session_id: Optional[str] = None
    page: Optional[str] = None
    element: Optional[str] = None


class PageViewRecord(BaseModel):
    """A page view ready to be stored."""

    session_id: Optional[str] = None
    user_id: Optional[int] = None
    page: str
    referrer: Optional[str] = None
    ip: str = "unknown"
    user_agent: str = ""
    device: DeviceType = DeviceType.DESKTOP


class TrackResponse(BaseModel):
    ok: bool = True


# -----------------------------------------------------------------------------
# Stats
# -----------------------------------------------------------------------------


class TrafficTotals(BaseModel):
    total: int = 0
    today: int = 0
    week: int = 0
    month: int = 0
    unique_sessions: int = 0
    unique_ips: int = 0


class PageCount(BaseModel):
    page: str
    views: int


class DeviceCount(BaseModel):
    device: Optional[str] = None
    count: int


class RecentPageView(BaseModel):
    id: int
    session_id: Optional[str] = None
    page: str
    referrer: Optional[str] = None
    ip: Optional[str] = None
    user_agent: Optional[str] = None
    device: Optional[str] = None
    created_at: Optional[datetime] = None


class ClickCount(BaseModel):
    element: Optional[str] = None
    page: Optional[str] = None
    count: int


class ReferrerCount(BaseModel):
    referrer: str
    count: int


class TrackingStats(BaseModel):
    """Admin traffic dashboard."""

    totals: TrafficTotals = Field(default_factory=TrafficTotals)
    by_page: list[PageCount] = Field(default_factory=list)
    by_device: list[DeviceCount] = Field(default_factory=list)
    recent: list[RecentPageView] = Field(default_factory=list)
    top_clicks: list[ClickCount] = Field(default_factory=list)
    top_referrers: list[ReferrerCount] = Field(default_factory=list)

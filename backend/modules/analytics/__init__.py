"""
Analytics module.

First-party page view and click tracking with an admin stats view.

Public API:
- IAnalyticsService: Interface for recording and reporting
- IEventRepository: Interface for event persistence
- TrackingStats: Aggregated dashboard figures
"""

from .interfaces import IAnalyticsService, IEventRepository
from .models import (
    DeviceType,
    PageViewBeacon,
    ClickBeacon,
    PageViewRecord,
    TrackingStats,
)

__all__ = [
    "IAnalyticsService",
    "IEventRepository",
    "DeviceType",
    "PageViewBeacon",
    "ClickBeacon",
    "PageViewRecord",
    "TrackingStats",
]

"""
Analytics module interfaces.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import ClickBeacon, PageViewBeacon, PageViewRecord, TrackingStats


@runtime_checkable
class IEventRepository(Protocol):
    """Persistence contract for page views and clicks."""

    async def log_page_view(self, record: PageViewRecord) -> None:
        ...

    async def log_click(self, click: ClickBeacon) -> None:
        ...

    async def get_stats(self) -> TrackingStats:
        """Aggregate traffic figures for the admin dashboard."""
        ...


@runtime_checkable
class IAnalyticsService(Protocol):
    """
    Interface for the analytics sink.

    Recording is best-effort; callers turn any failure into an
    ``ok: false`` acknowledgement.
    """

    async def record_page_view(
        self,
        beacon: PageViewBeacon,
        user_agent: str,
        ip: str,
        user_id: Optional[int] = None,
    ) -> bool:
        """
        Store a page view.

        Returns:
            True if stored, False if the visitor was filtered as a bot
        """
        ...

    async def record_click(self, beacon: ClickBeacon, user_agent: str) -> bool:
        """Store a click event. Returns False if filtered as a bot."""
        ...

    async def get_stats(self) -> TrackingStats:
        ...

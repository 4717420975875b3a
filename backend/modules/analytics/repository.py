"""
Event repository for page views and click events.
"""

import asyncio

from shared.repository import BaseRepository

from .models import (
    ClickBeacon,
    ClickCount,
    DeviceCount,
    PageCount,
    PageViewRecord,
    RecentPageView,
    ReferrerCount,
    TrackingStats,
    TrafficTotals,
)

TOTALS_QUERY = """
    SELECT
        COUNT(*) AS total,
        COUNT(*) FILTER (WHERE created_at >= NOW() - INTERVAL '1 day') AS today,
        COUNT(*) FILTER (WHERE created_at >= NOW() - INTERVAL '7 days') AS week,
        COUNT(*) FILTER (WHERE created_at >= NOW() - INTERVAL '30 days') AS month,
        COUNT(DISTINCT session_id) AS unique_sessions,
        COUNT(DISTINCT ip) AS unique_ips
    FROM page_views
"""

BY_PAGE_QUERY = """
    SELECT page, COUNT(*) AS views FROM page_views
    GROUP BY page ORDER BY views DESC LIMIT 20
"""

BY_DEVICE_QUERY = """
    SELECT device, COUNT(*) AS count FROM page_views
    GROUP BY device ORDER BY count DESC
"""

RECENT_QUERY = """
    SELECT id, session_id, page, referrer, ip, user_agent, device, created_at
    FROM page_views ORDER BY created_at DESC LIMIT 100
"""

TOP_CLICKS_QUERY = """
    SELECT element, page, COUNT(*) AS count FROM click_events
    GROUP BY element, page ORDER BY count DESC LIMIT 20
"""

TOP_REFERRERS_QUERY = """
    SELECT referrer, COUNT(*) AS count FROM page_views
    WHERE referrer IS NOT NULL AND referrer != ''
    GROUP BY referrer ORDER BY count DESC LIMIT 15
"""


class EventRepository(BaseRepository[PageViewRecord]):
    """Repository for the page_views and click_events tables."""

    schema_statements = (
        """
        CREATE TABLE IF NOT EXISTS page_views (
            id         SERIAL PRIMARY KEY,
            session_id TEXT,
            user_id    INTEGER,
            page       TEXT NOT NULL,
            referrer   TEXT,
            ip         TEXT,
            user_agent TEXT,
            device     TEXT,
            created_at TIMESTAMPTZ DEFAULT NOW()
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS click_events (
            id         SERIAL PRIMARY KEY,
            session_id TEXT,
            page       TEXT,
            element    TEXT,
            created_at TIMESTAMPTZ DEFAULT NOW()
        )
        """,
        "CREATE INDEX IF NOT EXISTS idx_pv_created ON page_views (created_at DESC)",
        "CREATE INDEX IF NOT EXISTS idx_pv_page ON page_views (page)",
        "CREATE INDEX IF NOT EXISTS idx_pv_session ON page_views (session_id)",
    )

    async def log_page_view(self, record: PageViewRecord) -> None:
        await self._db.execute(
            """
            INSERT INTO page_views (session_id, user_id, page, referrer, ip, user_agent, device)
            VALUES (%s, %s, %s, %s, %s, %s, %s)
            """,
            (
                record.session_id,
                record.user_id,
                record.page,
                record.referrer or None,
                record.ip,
                record.user_agent,
                record.device.value,
            ),
        )

    async def log_click(self, click: ClickBeacon) -> None:
        await self._db.execute(
            "INSERT INTO click_events (session_id, page, element) VALUES (%s, %s, %s)",
            (click.session_id, click.page, click.element),
        )

    async def get_stats(self) -> TrackingStats:
        totals, by_page, by_device, recent, top_clicks, top_referrers = await asyncio.gather(
            self._db.fetch_one(TOTALS_QUERY),
            self._db.fetch_all(BY_PAGE_QUERY),
            self._db.fetch_all(BY_DEVICE_QUERY),
            self._db.fetch_all(RECENT_QUERY),
            self._db.fetch_all(TOP_CLICKS_QUERY),
            self._db.fetch_all(TOP_REFERRERS_QUERY),
        )
        return TrackingStats(
            totals=TrafficTotals(**(totals or {})),
            by_page=[PageCount(**row) for row in by_page],
            by_device=[DeviceCount(**row) for row in by_device],
            recent=[RecentPageView(**row) for row in recent],
            top_clicks=[ClickCount(**row) for row in top_clicks],
            top_referrers=[ReferrerCount(**row) for row in top_referrers],
        )

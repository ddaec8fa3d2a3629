"""
Analytics Service

Aggregates the click events of a link into the breakdowns shown on the
dashboard, and keeps the link's cached click counter honest.

Design Decisions:
- Aggregation runs in Python over the link's full event list; every
  breakdown is a category -> count mapping
- Null categories are reported as "Unknown" (except regions and
  referrers, which only count events that have a value)
- Dates are bucketed in settings.ANALYTICS_TIMEZONE (UTC by default)
- Reconciliation: when the cached click_count differs from the number of
  stored events, the counter is overwritten with the true count
"""

import logging
from collections import Counter
from datetime import timedelta
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from link_analytics.core.clock import local_date, utc_now
from link_analytics.core.exceptions import AccessDeniedError, DatabaseError, LinkNotFoundError
from link_analytics.core.setting import settings
from link_analytics.db.models import ClickEvent, Link
from link_analytics.services.link_store import LinkStore

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


def count_by(events: Iterable[ClickEvent], attribute: str) -> dict[str, int]:
    """Count events by ``attribute``, reporting null values as "Unknown"."""
    return dict(Counter(getattr(event, attribute) or UNKNOWN for event in events))


def count_regions(events: Iterable[ClickEvent]) -> dict[str, int]:
    """Count events with a region, keyed "region, country" when the country is known."""
    counter = Counter()
    for event in events:
        if not event.region:
            continue
        key = f"{event.region}, {event.country}" if event.country else event.region
        counter[key] += 1
    return dict(counter)


def count_referrers(events: Iterable[ClickEvent]) -> dict[str, int]:
    return dict(Counter(event.referer for event in events if event.referer))


def count_by_date(events: Iterable[ClickEvent], tz_name: str = "UTC") -> dict[str, int]:
    counter = Counter(local_date(event.clicked_at, tz_name).isoformat() for event in events)
    return dict(sorted(counter.items()))


def serialize_click(event: ClickEvent) -> dict:
    return event.model_dump()


class AnalyticsService:
    """
    Service for aggregating click analytics.
    """

    def __init__(
        self,
        session: AsyncSession,
        tz_name: str = settings.ANALYTICS_TIMEZONE,
        recent_limit: int = settings.RECENT_CLICKS_LIMIT,
    ):
        """
        Args:
            session: Async database session for database operations
            tz_name: Timezone used for the clicks-by-date series
            recent_limit: Number of recent clicks included in a summary
        """
        self.session = session
        self.link_store = LinkStore(session)
        self.tz_name = tz_name
        self.recent_limit = recent_limit

    async def get_owned_link(self, link_id: int, user_id: int) -> Link:
        """
        Load a link and check that ``user_id`` owns it.

        Raises:
            LinkNotFoundError: If the link does not exist
            AccessDeniedError: If it belongs to another user
        """
        link = await self.link_store.get_link_by_id(link_id)
        if link is None:
            raise LinkNotFoundError(link_id)
        if link.owner_user_id != user_id:
            logger.warning(f"User {user_id} denied analytics access to link {link_id}")
            raise AccessDeniedError(link_id)
        return link

    async def _load_events(self, link_id: int, since=None) -> list[ClickEvent]:
        statement = select(ClickEvent).where(ClickEvent.link_id == link_id)
        if since is not None:
            statement = statement.where(ClickEvent.clicked_at >= since)
        statement = statement.order_by(ClickEvent.clicked_at.desc(), ClickEvent.id.desc())
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load clicks for link {link_id}: {e}")
            raise DatabaseError(f"Failed to load clicks: {str(e)}", e)
        return list(result.scalars().all())

    async def summarize(self, link_id: int) -> Optional[dict]:
        """
        Build the analytics summary of one link.

        Returns:
            Dictionary with link details, aggregated breakdowns and the most
            recent clicks, or None if the link does not exist
        """
        link = await self.link_store.get_link_by_id(link_id)
        if link is None:
            return None

        events = await self._load_events(link_id)
        total_clicks = len(events)

        summary = {
            "link_id": link.id,
            "short_code": link.short_code,
            "url": link.destination_url,
            "total_clicks": total_clicks,
            "analytics": {
                "total_clicks": total_clicks,
                "device_breakdown": count_by(events, "device_type"),
                "browser_breakdown": count_by(events, "browser"),
                "os_breakdown": count_by(events, "os"),
                "country_breakdown": count_by(events, "country"),
                "region_breakdown": count_regions(events),
                "clicks_by_date": count_by_date(events, self.tz_name),
                "referrer_breakdown": count_referrers(events),
            },
            "recent_clicks": [serialize_click(event) for event in events[:self.recent_limit]],
        }

        if link.click_count != total_clicks:
            await self._reconcile_click_count(link, total_clicks)

        return summary

    async def _reconcile_click_count(self, link: Link, total_clicks: int) -> None:
        """
        Overwrite the cached counter with the true event count.

        Failure is logged and ignored; the next summary retries.
        """
        link_id = link.id
        cached = link.click_count
        try:
            await self.link_store.set_click_count(link_id, total_clicks)
            await self.session.commit()
            logger.info(f"Reconciled click count for link {link_id}: {cached} -> {total_clicks}")
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.warning(f"Failed to reconcile click count for link {link_id}: {e}")

    async def summarize_for_user(self, user_id: int) -> list[dict]:
        """
        Summaries for every link owned by ``user_id``, newest link first.

        Links whose summary comes back empty (e.g. deleted meanwhile) are
        dropped.
        """
        links = await self.link_store.list_links_by_owner(user_id, newest_first=True)
        link_ids = [link.id for link in links]

        summaries = []
        for link_id in link_ids:
            summary = await self.summarize(link_id)
            if summary is not None:
                summaries.append(summary)
        return summaries

    async def events_for_period(self, link_id: int, days: int = 7) -> dict:
        """
        Raw click events of the last ``days`` days, newest first.
        """
        since = utc_now() - timedelta(days=days)
        events = await self._load_events(link_id, since=since)
        return {
            "period": f"{days} days",
            "total_clicks": len(events),
            "clicks": [serialize_click(event) for event in events],
        }

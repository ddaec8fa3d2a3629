"""
Tests for click aggregation, counter reconciliation and the user roll-up.
"""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from sqlalchemy import delete, func, select
from sqlalchemy.exc import OperationalError

from link_analytics.core.clock import utc_now
from link_analytics.core.exceptions import AccessDeniedError, LinkNotFoundError
from link_analytics.db.models import ClickEvent, Link
from link_analytics.services.analytics_service import (
    AnalyticsService,
    count_by,
    count_by_date,
    count_referrers,
    count_regions,
)
from link_analytics.services.link_store import LinkStore
from link_analytics.services.stats_service import StatsService


def event(**fields):
    defaults = {
        "device_type": None, "browser": None, "os": None, "country": None,
        "region": None, "referer": None, "clicked_at": utc_now(),
    }
    defaults.update(fields)
    return SimpleNamespace(**defaults)


class TestBreakdowns:

    def test_count_by_reports_unknown(self):
        events = [event(device_type="mobile"), event(device_type="mobile"), event()]

        assert count_by(events, "device_type") == {"mobile": 2, "Unknown": 1}

    def test_regions_carry_country(self):
        events = [
            event(region="Jharkhand", country="India"),
            event(region="Jharkhand", country="India"),
            event(region="Bavaria"),
            event(country="France"),
        ]

        assert count_regions(events) == {"Jharkhand, India": 2, "Bavaria": 1}

    def test_referrers_skip_empty(self):
        events = [event(referer="https://t.co/x"), event(referer=""), event()]

        assert count_referrers(events) == {"https://t.co/x": 1}

    def test_dates_are_bucketed_in_utc(self):
        events = [
            event(clicked_at=datetime(2026, 1, 1, 23, 30, tzinfo=timezone.utc)),
            event(clicked_at=datetime(2026, 1, 2, 0, 30, tzinfo=timezone.utc)),
            event(clicked_at=datetime(2026, 1, 2, 12, 0)),  # naive values are UTC
        ]

        assert count_by_date(events) == {"2026-01-01": 1, "2026-01-02": 2}

    def test_dates_in_configured_timezone(self):
        events = [
            event(clicked_at=datetime(2026, 1, 1, 23, 30, tzinfo=timezone.utc)),
            event(clicked_at=datetime(2026, 1, 2, 0, 30, tzinfo=timezone.utc)),
        ]

        assert count_by_date(events, "Asia/Kolkata") == {"2026-01-02": 2}

    def test_dates_are_sorted(self):
        events = [
            event(clicked_at=datetime(2026, 3, 1, tzinfo=timezone.utc)),
            event(clicked_at=datetime(2026, 1, 1, tzinfo=timezone.utc)),
        ]

        assert list(count_by_date(events)) == ["2026-01-01", "2026-03-01"]


class TestSummarize:

    @pytest.mark.asyncio
    async def test_summary_contents(self, session, make_link, make_click):
        link = await make_link(short_code="abc123", destination_url="https://example.com/a")
        await make_click(
            link.id, device_type="mobile", browser="Mobile Safari", os="iOS",
            country="United States", region="California", referer="https://t.co/x",
        )
        await make_click(link.id, device_type="desktop", browser="Chrome", os="Windows")

        summary = await AnalyticsService(session).summarize(link.id)

        assert summary["link_id"] == link.id
        assert summary["short_code"] == "abc123"
        assert summary["url"] == "https://example.com/a"
        assert summary["total_clicks"] == 2
        analytics = summary["analytics"]
        assert analytics["total_clicks"] == 2
        assert analytics["device_breakdown"] == {"mobile": 1, "desktop": 1}
        assert analytics["browser_breakdown"] == {"Mobile Safari": 1, "Chrome": 1}
        assert analytics["os_breakdown"] == {"iOS": 1, "Windows": 1}
        assert analytics["country_breakdown"] == {"United States": 1, "Unknown": 1}
        assert analytics["region_breakdown"] == {"California, United States": 1}
        assert analytics["referrer_breakdown"] == {"https://t.co/x": 1}
        assert sum(analytics["clicks_by_date"].values()) == 2
        assert len(summary["recent_clicks"]) == 2

    @pytest.mark.asyncio
    async def test_no_clicks(self, session, make_link):
        link = await make_link()

        summary = await AnalyticsService(session).summarize(link.id)

        assert summary["total_clicks"] == 0
        assert summary["analytics"]["device_breakdown"] == {}
        assert summary["analytics"]["clicks_by_date"] == {}
        assert summary["recent_clicks"] == []

    @pytest.mark.asyncio
    async def test_missing_link(self, session):
        assert await AnalyticsService(session).summarize(999) is None

    @pytest.mark.asyncio
    async def test_recent_clicks_are_newest_first_and_limited(self, session, make_link, make_click):
        link = await make_link()
        start = utc_now() - timedelta(hours=1)
        for minute in range(12):
            await make_click(link.id, clicked_at=start + timedelta(minutes=minute), ip=f"8.8.8.{minute}")

        summary = await AnalyticsService(session, recent_limit=10).summarize(link.id)

        recent = summary["recent_clicks"]
        assert len(recent) == 10
        assert recent[0]["ip"] == "8.8.8.11"
        assert recent[-1]["ip"] == "8.8.8.2"
        assert summary["total_clicks"] == 12

    @pytest.mark.asyncio
    async def test_counter_is_reconciled(self, database, session, make_link, make_click):
        link = await make_link(click_count=5)
        await make_click(link.id)
        await make_click(link.id)

        summary = await AnalyticsService(session).summarize(link.id)

        assert summary["total_clicks"] == 2
        async with database.session() as fresh:
            stored = await fresh.get(Link, link.id)
            assert stored.click_count == 2

    @pytest.mark.asyncio
    async def test_failed_reconcile_still_returns_summary(
        self, database, session, make_link, make_click, monkeypatch, caplog
    ):
        async def failing_set_click_count(self, link_id, value):
            raise OperationalError("UPDATE short_links", {}, Exception("database is locked"))

        monkeypatch.setattr(LinkStore, "set_click_count", failing_set_click_count)
        link = await make_link(click_count=5)
        await make_click(link.id, device_type="mobile")
        await make_click(link.id, device_type="mobile")

        summary = await AnalyticsService(session).summarize(link.id)

        assert summary["total_clicks"] == 2
        assert summary["analytics"]["device_breakdown"] == {"mobile": 2}
        assert len(summary["recent_clicks"]) == 2
        assert "Failed to reconcile click count" in caplog.text
        async with database.session() as fresh:
            stored = await fresh.get(Link, link.id)
            assert stored.click_count == 5

    @pytest.mark.asyncio
    async def test_lagging_counter_is_raised(self, database, session, make_link, make_click):
        link = await make_link(click_count=0)
        await make_click(link.id)

        await AnalyticsService(session).summarize(link.id)

        async with database.session() as fresh:
            stored = await fresh.get(Link, link.id)
            assert stored.click_count == 1


class TestOwnership:

    @pytest.mark.asyncio
    async def test_owner_gets_link(self, session, make_link):
        link = await make_link(owner_user_id=7)

        owned = await AnalyticsService(session).get_owned_link(link.id, 7)

        assert owned.id == link.id

    @pytest.mark.asyncio
    async def test_other_user_is_denied(self, session, make_link):
        link = await make_link(owner_user_id=7)

        with pytest.raises(AccessDeniedError):
            await AnalyticsService(session).get_owned_link(link.id, 8)

    @pytest.mark.asyncio
    async def test_unknown_link(self, session):
        with pytest.raises(LinkNotFoundError):
            await AnalyticsService(session).get_owned_link(12345, 7)


class TestUserSummaries:

    @pytest.mark.asyncio
    async def test_newest_link_first(self, session, make_link, make_click):
        old = await make_link(owner_user_id=3, created_at=utc_now() - timedelta(days=2))
        new = await make_link(owner_user_id=3, created_at=utc_now())
        await make_link(owner_user_id=4)
        await make_click(old.id)

        summaries = await AnalyticsService(session).summarize_for_user(3)

        assert [s["link_id"] for s in summaries] == [new.id, old.id]
        assert summaries[1]["total_clicks"] == 1

    @pytest.mark.asyncio
    async def test_user_without_links(self, session):
        assert await AnalyticsService(session).summarize_for_user(42) == []


class TestPeriod:

    @pytest.mark.asyncio
    async def test_only_recent_events(self, session, make_link, make_click):
        link = await make_link()
        await make_click(link.id, clicked_at=utc_now() - timedelta(days=30))
        await make_click(link.id, clicked_at=utc_now() - timedelta(days=2))
        await make_click(link.id, clicked_at=utc_now() - timedelta(hours=1))

        result = await AnalyticsService(session).events_for_period(link.id, days=7)

        assert result["period"] == "7 days"
        assert result["total_clicks"] == 2
        assert len(result["clicks"]) == 2
        assert result["clicks"][0]["clicked_at"] > result["clicks"][1]["clicked_at"]


class TestRollup:

    @pytest.mark.asyncio
    async def test_rollup(self, session, make_link):
        await make_link(owner_user_id=5, click_count=3)
        top = await make_link(owner_user_id=5, click_count=10, short_code="top")
        await make_link(owner_user_id=5, click_count=1, is_active=False)
        await make_link(owner_user_id=6, click_count=100)

        stats = await StatsService(session).rollup(5)

        assert stats["total_links"] == 3
        assert stats["total_clicks"] == 14
        assert stats["active_links"] == 2
        assert stats["inactive_links"] == 1
        assert stats["most_clicked_link"] == {
            "id": top.id,
            "short_code": "top",
            "url": top.destination_url,
            "clicks": 10,
        }

    @pytest.mark.asyncio
    async def test_tie_goes_to_first_link(self, session, make_link):
        first = await make_link(owner_user_id=5, click_count=4)
        await make_link(owner_user_id=5, click_count=4)

        stats = await StatsService(session).rollup(5)

        assert stats["most_clicked_link"]["id"] == first.id

    @pytest.mark.asyncio
    async def test_no_links(self, session):
        stats = await StatsService(session).rollup(99)

        assert stats == {
            "total_links": 0,
            "total_clicks": 0,
            "active_links": 0,
            "inactive_links": 0,
            "most_clicked_link": None,
        }


class TestCascade:

    @pytest.mark.asyncio
    async def test_deleting_link_removes_its_events(self, session, make_link, make_click):
        link = await make_link()
        other = await make_link()
        await make_click(link.id)
        await make_click(other.id)

        await session.execute(delete(Link).where(Link.id == link.id))
        await session.commit()

        result = await session.execute(select(func.count()).select_from(ClickEvent))
        assert result.scalar_one() == 1

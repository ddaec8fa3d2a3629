"""
Shared fixtures for the link analytics tests.

Each test gets its own SQLite file, a GeoResolver backed by an in-memory
fake reader, and an application with those resources installed. Requests go
through httpx's ASGI transport, which returns only after background tasks
have finished, so recorded clicks can be asserted right after a redirect.
"""

from datetime import datetime
from types import SimpleNamespace
from typing import Optional

import geoip2.errors
import httpx
import jwt
import pytest

from link_analytics.core.lifecycle import install_resources
from link_analytics.core.rate_limit import limiter
from link_analytics.core.setting import settings
from link_analytics.db.models import ClickEvent, Link
from link_analytics.db.session import Database
from link_analytics.main import create_app
from link_analytics.services.geo_resolver import GeoResolver

# ip -> (country code, region code, city, time zone, country name, region name)
GEO_FIXTURES = {
    "8.8.8.8": ("US", "CA", "Mountain View", "America/Los_Angeles", "United States", "California"),
    "49.36.10.1": ("IN", "JH", "Ranchi", "Asia/Kolkata", "India", "Jharkhand"),
    "81.2.69.142": ("GB", "ENG", "London", "Europe/London", "United Kingdom", "England"),
    "200.48.225.130": ("PE", "LIM", "Lima", "America/Lima", "Peru", "Lima Region"),
    "41.77.8.1": ("ZZ", "XX", None, None, None, None),
}


def geo_response(
    country: Optional[str],
    region: Optional[str],
    city: Optional[str],
    time_zone: Optional[str],
    country_name: Optional[str] = None,
    region_name: Optional[str] = None,
):
    """Object shaped like geoip2.models.City for the fields the resolver reads."""
    return SimpleNamespace(
        country=SimpleNamespace(iso_code=country, name=country_name),
        subdivisions=SimpleNamespace(most_specific=SimpleNamespace(iso_code=region, name=region_name)),
        city=SimpleNamespace(name=city),
        location=SimpleNamespace(time_zone=time_zone),
    )


class FakeGeoReader:
    """Stand-in for geoip2.database.Reader serving GEO_FIXTURES."""

    def __init__(self, entries=None):
        self.entries = GEO_FIXTURES if entries is None else entries
        self.lookups = []
        self.closed = False

    def city(self, ip: str):
        self.lookups.append(ip)
        if ip not in self.entries:
            raise geoip2.errors.AddressNotFoundError(f"The address {ip} is not in the database.")
        return geo_response(*self.entries[ip])

    def close(self):
        self.closed = True


def make_token(user_id, claim: str = "id") -> str:
    return jwt.encode({claim: user_id}, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def auth_headers(user_id: int) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


@pytest.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
async def session(database):
    async with database.session() as session:
        yield session


@pytest.fixture
def geo_reader():
    return FakeGeoReader()


@pytest.fixture
def geo_resolver(geo_reader):
    return GeoResolver(reader=geo_reader, timeout=1.0)


@pytest.fixture
def make_link(database):
    """Factory inserting a link; returns the stored row."""
    counter = {"n": 0}

    async def _make_link(
        short_code: Optional[str] = None,
        destination_url: str = "https://example.com/landing",
        owner_user_id: int = 1,
        is_active: bool = True,
        expires_at: Optional[datetime] = None,
        click_count: int = 0,
        created_at: Optional[datetime] = None,
    ) -> Link:
        counter["n"] += 1
        link = Link(
            short_code=short_code or f"code{counter['n']}",
            destination_url=destination_url,
            owner_user_id=owner_user_id,
            is_active=is_active,
            expires_at=expires_at,
            click_count=click_count,
        )
        if created_at is not None:
            link.created_at = created_at
        async with database.session() as session:
            session.add(link)
            await session.commit()
            await session.refresh(link)
        return link

    return _make_link


@pytest.fixture
def make_click(database):
    """Factory inserting a click event directly, bypassing the recorder."""

    async def _make_click(link_id: int, **fields) -> ClickEvent:
        click = ClickEvent(link_id=link_id, **fields)
        async with database.session() as session:
            session.add(click)
            await session.commit()
            await session.refresh(click)
        return click

    return _make_click


@pytest.fixture
def app(database, geo_resolver, monkeypatch):
    monkeypatch.setattr(limiter, "enabled", False)
    application = create_app()
    install_resources(application, database, geo_resolver)
    return application


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client

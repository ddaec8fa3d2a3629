"""
Geo Resolver

Maps a client IP to country, region, city and timezone using an offline
MaxMind GeoLite2/GeoIP2 City database.

Design Decisions:
- Loopback and private ranges short-circuit to a synthetic "Local" location
- The database is opened once at startup and shared (the reader is
  thread-safe); lookups run in a worker thread under a timeout
- Any miss or failure yields an all-None location, never an exception, so
  click recording cannot fail because of geo data
"""

import asyncio
import logging
import os
from dataclasses import asdict, dataclass
from typing import Optional

import geoip2.database
import geoip2.errors

from link_analytics.core.validators import normalize_ip
from link_analytics.services.geo_names import get_country_name, get_region_name

logger = logging.getLogger(__name__)

LOCAL_PREFIXES = ("192.168.", "10.", "172.")
LOCAL_ADDRESSES = {"::1", "127.0.0.1"}


@dataclass(frozen=True)
class GeoLocation:
    country: Optional[str] = None
    region: Optional[str] = None
    city: Optional[str] = None
    timezone: Optional[str] = None

    def as_dict(self) -> dict:
        return asdict(self)


UNKNOWN_LOCATION = GeoLocation()
LOCAL_LOCATION = GeoLocation(country="Local", region="Local Network", city="Local", timezone=None)


def is_local_ip(ip: Optional[str]) -> bool:
    """True for missing, loopback and private-range addresses."""
    if not ip:
        return True
    return ip in LOCAL_ADDRESSES or ip.startswith(LOCAL_PREFIXES)


class GeoResolver:
    """
    Resolve IP addresses against a GeoIP2 City reader.

    Any object with a ``city(ip)`` method returning a geoip2 City model can
    be used as the reader.
    """

    def __init__(self, reader=None, timeout: float = 2.0):
        self.reader = reader
        self.timeout = timeout

    @classmethod
    def from_path(cls, path: Optional[str], timeout: float = 2.0) -> "GeoResolver":
        """
        Open the database at ``path``.

        A missing or unreadable file leaves the resolver without a reader:
        private addresses still resolve to "Local", everything else to None.
        """
        if not path or not os.path.exists(path):
            logger.warning(f"GeoIP database not found at {path}; geo lookups disabled")
            return cls(reader=None, timeout=timeout)

        try:
            reader = geoip2.database.Reader(path)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to open GeoIP database {path}: {e}")
            return cls(reader=None, timeout=timeout)

        logger.info(f"GeoIP database loaded from {path}")
        return cls(reader=reader, timeout=timeout)

    def close(self) -> None:
        if self.reader is not None and hasattr(self.reader, "close"):
            self.reader.close()

    async def resolve(self, ip: Optional[str]) -> GeoLocation:
        """
        Resolve ``ip`` to a location.

        Returns:
            LOCAL_LOCATION for loopback/private addresses, the looked-up
            location on success, UNKNOWN_LOCATION otherwise
        """
        ip = normalize_ip(ip)
        if is_local_ip(ip):
            return LOCAL_LOCATION

        if self.reader is None:
            return UNKNOWN_LOCATION

        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self._lookup, ip),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Geo lookup for {ip} timed out after {self.timeout}s")
        except geoip2.errors.AddressNotFoundError:
            logger.debug(f"No geo entry for {ip}")
        except Exception as e:
            logger.warning(f"Geo lookup for {ip} failed: {e}")
        return UNKNOWN_LOCATION

    def _lookup(self, ip: str) -> GeoLocation:
        response = self.reader.city(ip)

        country_code = response.country.iso_code
        subdivision = response.subdivisions.most_specific

        return GeoLocation(
            country=get_country_name(country_code, fallback=response.country.name),
            region=get_region_name(subdivision.iso_code, country_code, fallback=subdivision.name),
            city=response.city.name or None,
            timezone=response.location.time_zone or None,
        )

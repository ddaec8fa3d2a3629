"""
Click Recording Service

Persists one click event per successful redirect and bumps the link's
cached counter.

Design Decisions:
- Runs after the redirect response has been sent (background task), so the
  geo lookup never delays the visitor
- Event insert and counter increment are separate transactions: a failed
  insert never increments, a failed increment is repaired by the analytics
  aggregator on its next read
- Opens its own sessions from the shared Database; the request session is
  already closed when this runs
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError

from link_analytics.db.models import ClickEvent
from link_analytics.db.session import Database
from link_analytics.services.geo_resolver import GeoResolver
from link_analytics.services.link_store import LinkStore
from link_analytics.services.ua_classifier import DeviceInfo, classify_user_agent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestContext:
    """Raw request metadata captured by the redirect handler."""
    ip: Optional[str] = None
    user_agent: Optional[str] = None
    referer: Optional[str] = None


class ClickRecorder:
    """
    Service for recording clicks.

    One instance is created at startup and shared by all background tasks.
    """

    def __init__(
        self,
        database: Database,
        geo_resolver: GeoResolver,
        classifier: Callable[[Optional[str]], DeviceInfo] = classify_user_agent,
    ):
        """
        Args:
            database: Shared engine and session factory
            geo_resolver: Resolver for the client IP
            classifier: User-agent classifier
        """
        self.database = database
        self.geo_resolver = geo_resolver
        self.classifier = classifier

    async def record(self, link_id: int, context: RequestContext) -> Optional[ClickEvent]:
        """
        Record a click on ``link_id``.

        Returns:
            The stored ClickEvent, or None when the insert failed
        """
        device = self._classify(context.user_agent)
        location = await self.geo_resolver.resolve(context.ip)

        click = ClickEvent(
            link_id=link_id,
            ip=context.ip,
            user_agent=context.user_agent,
            referer=context.referer or None,
            **device.as_dict(),
            **location.as_dict(),
        )

        try:
            async with self.database.session() as session:
                session.add(click)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to store click for link {link_id}: {e}", exc_info=True)
            return None

        try:
            async with self.database.session() as session:
                await LinkStore(session).increment_click_count(link_id)
                await session.commit()
        except SQLAlchemyError as e:
            logger.warning(f"Failed to increment click count for link {link_id}: {e}")

        return click

    def _classify(self, user_agent: Optional[str]) -> DeviceInfo:
        try:
            return self.classifier(user_agent)
        except Exception as e:
            logger.warning(f"Device classification failed: {e}")
            return DeviceInfo()

"""
Redirect Service

Decides what happens to a request for a short code: redirect, 404 or 410.
Click recording is not done here; the endpoint schedules it only for
FOUND_ACTIVE results.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from link_analytics.core.clock import as_utc, utc_now
from link_analytics.core.exceptions import DatabaseError
from link_analytics.core.validators import sanitize_short_code
from link_analytics.db.models import Link
from link_analytics.services.link_store import LinkStore

logger = logging.getLogger(__name__)


class RedirectOutcome(str, Enum):
    FOUND_ACTIVE = "found_active"
    FOUND_INACTIVE = "found_inactive"
    FOUND_EXPIRED = "found_expired"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class RedirectResult:
    outcome: RedirectOutcome
    short_code: str
    link: Optional[Link] = None

    @property
    def should_redirect(self) -> bool:
        return self.outcome is RedirectOutcome.FOUND_ACTIVE


def is_expired(link: Link, now: Optional[datetime] = None) -> bool:
    if link.expires_at is None:
        return False
    return as_utc(link.expires_at) < (now or utc_now())


class RedirectService:
    """
    Service for handling URL redirections.
    """

    def __init__(self, session: AsyncSession):
        """
        Args:
            session: Async database session for database operations
        """
        self.session = session
        self.link_store = LinkStore(session)

    async def resolve(self, short_code: str, now: Optional[datetime] = None) -> RedirectResult:
        """
        Resolve ``short_code`` to one of the redirect outcomes.

        Blank or overlong codes are reported as NOT_FOUND without a query. The
        inactive check runs before the expiry check.

        Raises:
            DatabaseError: If the lookup fails
        """
        sanitized_code = sanitize_short_code(short_code)
        if not sanitized_code:
            return RedirectResult(RedirectOutcome.NOT_FOUND, short_code)

        try:
            link = await self.link_store.get_link_by_short_code(sanitized_code)
        except SQLAlchemyError as e:
            logger.error(f"Failed to look up short code '{sanitized_code}': {e}")
            raise DatabaseError(f"Failed to look up short code: {str(e)}", e)

        if link is None:
            return RedirectResult(RedirectOutcome.NOT_FOUND, sanitized_code)

        if not link.is_active:
            logger.info(f"Refusing redirect for inactive link '{sanitized_code}'")
            return RedirectResult(RedirectOutcome.FOUND_INACTIVE, sanitized_code, link)

        if is_expired(link, now):
            logger.info(f"Refusing redirect for expired link '{sanitized_code}'")
            return RedirectResult(RedirectOutcome.FOUND_EXPIRED, sanitized_code, link)

        return RedirectResult(RedirectOutcome.FOUND_ACTIVE, sanitized_code, link)

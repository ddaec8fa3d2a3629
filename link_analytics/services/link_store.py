"""
Link Store

Read access to link records plus the two counter writes the click pipeline
needs. Creating and editing links belongs to the link management service;
this module only exposes what redirect and analytics consume.

Design Decisions:
- Counter increments use a database-level UPDATE (no read-modify-write)
- Commits are handled by the caller so a service can group statements
"""

from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from link_analytics.db.models import Link


class LinkStore:
    """Link lookups and counter maintenance on one session."""

    def __init__(self, session: AsyncSession):
        """
        Args:
            session: Async database session for database operations
        """
        self.session = session

    async def get_link_by_short_code(self, short_code: str) -> Optional[Link]:
        statement = select(Link).where(Link.short_code == short_code)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_link_by_id(self, link_id: int) -> Optional[Link]:
        statement = select(Link).where(Link.id == link_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list_links_by_owner(self, user_id: int, newest_first: bool = False) -> list[Link]:
        """
        All links owned by ``user_id``.

        Ordered by id ascending, or by creation time descending when
        ``newest_first`` is set.
        """
        statement = select(Link).where(Link.owner_user_id == user_id)
        if newest_first:
            statement = statement.order_by(Link.created_at.desc(), Link.id.desc())
        else:
            statement = statement.order_by(Link.id)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def increment_click_count(self, link_id: int) -> None:
        """
        Increment the click counter atomically.

        Concurrent redirects to the same link each add exactly one; a
        missing link id is a no-op.
        """
        statement = (
            update(Link)
            .where(Link.id == link_id)
            .values(click_count=Link.click_count + 1)
        )
        await self.session.execute(statement)

    async def set_click_count(self, link_id: int, value: int) -> None:
        """Overwrite the cached counter with a reconciled value."""
        statement = (
            update(Link)
            .where(Link.id == link_id)
            .values(click_count=max(value, 0))
        )
        await self.session.execute(statement)

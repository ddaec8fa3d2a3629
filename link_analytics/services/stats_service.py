"""
Statistics Service

Per-user roll-up built from link records only.

Design Decisions:
- Uses the cached click_count of each link instead of scanning click
  events, so totals can briefly lag until the analytics aggregator
  reconciles a link
"""

from sqlalchemy.ext.asyncio import AsyncSession

from link_analytics.services.link_store import LinkStore


class StatsService:
    """
    Service for retrieving overall statistics of a user's links.
    """

    def __init__(self, session: AsyncSession):
        """
        Args:
            session: Async database session for database operations
        """
        self.session = session
        self.link_store = LinkStore(session)

    async def rollup(self, user_id: int) -> dict:
        """
        Get overall statistics for a user.

        Returns:
            Dictionary with:
            - total_links, active_links, inactive_links
            - total_clicks: Sum of cached click counters
            - most_clicked_link: Link with the highest counter (first one in
              id order on ties), or None when the user has no links
        """
        links = await self.link_store.list_links_by_owner(user_id)

        total_links = len(links)
        active_links = sum(1 for link in links if link.is_active)

        most_clicked = None
        for link in links:
            if most_clicked is None or link.click_count > most_clicked.click_count:
                most_clicked = link

        return {
            "total_links": total_links,
            "total_clicks": sum(link.click_count or 0 for link in links),
            "active_links": active_links,
            "inactive_links": total_links - active_links,
            "most_clicked_link": {
                "id": most_clicked.id,
                "short_code": most_clicked.short_code,
                "url": most_clicked.destination_url,
                "clicks": most_clicked.click_count,
            } if most_clicked else None,
        }

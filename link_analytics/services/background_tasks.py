"""
Background Task Helpers

Entry points scheduled with FastAPI BackgroundTasks. They run after the
response is sent, must never raise, and are bounded by a timeout so a slow
lookup cannot leave a task running forever.
"""

import asyncio
import logging

from link_analytics.core.setting import settings
from link_analytics.services.click_recorder import ClickRecorder, RequestContext

logger = logging.getLogger(__name__)


async def record_click_background(
    recorder: ClickRecorder,
    link_id: int,
    context: RequestContext,
    timeout: float = settings.CLICK_RECORD_TIMEOUT,
) -> None:
    """
    Background task to record a click.

    Args:
        recorder: Shared click recorder
        link_id: The link that was redirected
        context: IP, user agent and referer of the visitor
        timeout: Upper bound in seconds for the whole recording
    """
    try:
        await asyncio.wait_for(recorder.record(link_id, context), timeout=timeout)
    except asyncio.TimeoutError:
        logger.error(f"Recording click for link {link_id} timed out after {timeout}s")
    except Exception as e:
        logger.error(
            f"Failed to record click for link {link_id}: {str(e)}",
            exc_info=True
        )

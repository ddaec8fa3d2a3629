"""
Public Redirect Endpoint

Thin endpoint: resolves the short code through RedirectService, answers
immediately, and hands click recording to a background task that runs
after the response has been sent.
"""

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from link_analytics.core.exceptions import LinkNotFoundError, LinkUnavailableError
from link_analytics.core.network import get_client_ip
from link_analytics.core.rate_limit import RATE_LIMITS, limiter
from link_analytics.core.setting import settings
from link_analytics.db.session import get_session
from link_analytics.services.background_tasks import record_click_background
from link_analytics.services.click_recorder import ClickRecorder, RequestContext
from link_analytics.services.redirect_service import RedirectOutcome, RedirectService

router = APIRouter()


def get_click_recorder(request: Request) -> ClickRecorder:
    return request.app.state.click_recorder


@router.get(
    "/{short_code}",
    status_code=status.HTTP_302_FOUND,
    summary="Redirect to destination URL",
    description="Redirects a short code to its destination and records the click in the background"
)
@limiter.limit(RATE_LIMITS["redirect"])
async def redirect_to_url(
    short_code: str,
    request: Request,
    background_tasks: BackgroundTasks,
    session: AsyncSession = Depends(get_session),
    recorder: ClickRecorder = Depends(get_click_recorder),
) -> RedirectResponse:
    """
    Redirect to the destination URL for a given short code.

    Raises:
        LinkNotFoundError: Unknown, blank or overlong short code (404)
        LinkUnavailableError: Inactive or expired link (410)
    """
    result = await RedirectService(session).resolve(short_code)

    if result.outcome is RedirectOutcome.NOT_FOUND:
        raise LinkNotFoundError(result.short_code)
    if result.outcome is RedirectOutcome.FOUND_INACTIVE:
        raise LinkUnavailableError(result.short_code, reason="inactive")
    if result.outcome is RedirectOutcome.FOUND_EXPIRED:
        raise LinkUnavailableError(result.short_code, reason="expired")

    context = RequestContext(
        ip=get_client_ip(request),
        user_agent=request.headers.get("User-Agent"),
        referer=request.headers.get("Referer"),
    )

    background_tasks.add_task(
        record_click_background,
        recorder,
        link_id=result.link.id,
        context=context,
    )

    return RedirectResponse(
        url=result.link.destination_url,
        status_code=settings.REDIRECT_STATUS_CODE,
        headers={"Cache-Control": "no-cache, no-store, must-revalidate, max-age=0"},
    )
